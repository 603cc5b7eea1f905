"""
Training, prediction and persistence for the multinomial logistic
regression model.

- `params` and `validation` define and check the training configuration.
- `train_model` builds engine arguments and hydrates the fitted model.
- `predict_model` scores or evaluates a model on new data.
- `metrics` computes goodness-of-fit statistics.
- `persistence` saves and loads model artifacts.
"""
