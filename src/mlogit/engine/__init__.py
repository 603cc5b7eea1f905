"""
Engine boundary for mlogit.

- `bundle` holds the argument protocol passed to a script invocation.
- `base` defines the `Engine` contract and backend lookup.
- `local` runs the scripts in-process with scikit-learn.
- `external` shells out to a matrix engine command.
"""
