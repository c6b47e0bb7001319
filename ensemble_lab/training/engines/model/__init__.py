"""
Model Train Engines (FINAL / FROZEN)

Concrete ModelTrainEngine implementations. Each engine is a thin binding
of ONE scikit-learn ensemble family to the design matrix produced by the
preparation steps.

bagging
    Bootstrap aggregation of decision trees (random forest). Every tree is
    fitted on an independent bootstrap resample; the records left out of a
    tree's resample give the out-of-bag estimate.

boosting
    Gradient boosting. Trees are fitted sequentially to the residual error
    of the current ensemble, each contribution scaled by learning_rate.

Do NOT import these engines outside training steps; use the registry.
"""
