"""Functional primitives for rollkit.

Higher-order helpers that take a function and return a derived collection or
scalar: rolling window reducers, folds, predicate functionals and mapping
helpers. Utilities are stateless and side-effect-free so they can be composed
into pipelines.
"""
