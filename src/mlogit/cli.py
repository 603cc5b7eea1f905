"""
Command-line entry point for mlogit.

Usage (from project root, with the virtualenv activated):

    python -m mlogit.cli train --data train.csv --response Species \
        --label-names Setosa Versicolor Virginica
    python -m mlogit.cli predict --data test.csv --out probabilities.csv

`train` fits a model and saves it to models/mlogit_model.joblib (or
--model). `predict` loads it, scores or evaluates the data, and writes the
probabilities (and statistics, when the data is labeled) as CSV.
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from mlogit.data.data_loader import load_matrix
from mlogit.engine.base import get_engine
from mlogit.models.persistence import load_model, save_model
from mlogit.models.predict_model import predict_mlogit
from mlogit.models.train_model import train_mlogit
from mlogit.utils.logging_utils import configure_logging, get_logger

logger = get_logger(__name__)


def _response(value: str) -> str | int:
    return int(value) if value.isdigit() else value


def run_train(args: argparse.Namespace) -> None:
    data = load_matrix(args.data)
    model = train_mlogit(
        data,
        response=args.response,
        intercept=args.intercept,
        shift_and_rescale=args.shift_and_rescale,
        tolerance=args.tolerance,
        outer_iter_max=args.outer_iter_max,
        inner_iter_max=args.inner_iter_max,
        reg_lambda=args.reg_lambda,
        label_names=args.label_names or (),
        engine=get_engine(args.engine),
    )
    model = save_model(model, args.model)
    print(model.show())


def run_predict(args: argparse.Namespace) -> None:
    model = load_model(args.model)
    data = load_matrix(args.data)
    result = predict_mlogit(model, data, engine=get_engine(args.engine))

    result.probabilities.to_csv(args.out, index=False)
    logger.info("Saved probabilities to %s", args.out)

    if result.statistics is not None:
        if args.stats_out:
            result.statistics.to_csv(args.stats_out, index=False)
            logger.info("Saved statistics to %s", args.stats_out)
        print("Evaluation statistics:")
        print(result.statistics.to_string(index=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Train and apply multinomial logistic regression models."
    )
    parser.add_argument(
        "--engine",
        choices=["local", "external"],
        default=None,
        help="Engine backend. If not provided, uses the default from config.py.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug detail, including the engine arguments of each call.",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Log warnings and errors only."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    train = sub.add_parser("train", help="Fit a model on a labeled CSV matrix.")
    train.add_argument("--data", required=True, help="Training CSV with a header row.")
    train.add_argument(
        "--response",
        type=_response,
        required=True,
        help="Response column name or 0-based position.",
    )
    train.add_argument("--model", default=None, help="Where to save the model.")
    train.add_argument(
        "--no-intercept", dest="intercept", action="store_false", help="Fit without intercept."
    )
    train.add_argument(
        "--shift-and-rescale",
        action="store_true",
        help="Standardize features before fitting (needs the intercept).",
    )
    train.add_argument("--tolerance", type=float, default=None)
    train.add_argument("--outer-iter-max", type=int, default=None)
    train.add_argument("--inner-iter-max", type=int, default=None)
    train.add_argument("--lambda", dest="reg_lambda", type=float, default=None)
    train.add_argument("--label-names", nargs="+", default=None)
    train.set_defaults(func=run_train)

    predict = sub.add_parser("predict", help="Score or evaluate a CSV matrix.")
    predict.add_argument("--data", required=True, help="CSV with a header row.")
    predict.add_argument("--model", default=None, help="Saved model to load.")
    predict.add_argument("--out", required=True, help="Where to write probabilities.")
    predict.add_argument("--stats-out", default=None, help="Where to write statistics.")
    predict.set_defaults(func=run_predict)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)
    args.func(args)


if __name__ == "__main__":
    main()
