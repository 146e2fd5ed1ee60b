"""Segment cost functions compatible with the ruptures API."""

from .factory import cost_factory
from .l1 import CostL1
from .l2 import CostL2
from .rbf import CostRbf
from .normal import CostNormal
from .poisson import CostPoisson
from .bernoulli import CostBernoulli
from .binomial import CostBinomial
from .ar import CostAR

__all__ = [
    "cost_factory",
    "CostL1",
    "CostL2",
    "CostRbf",
    "CostNormal",
    "CostPoisson",
    "CostBernoulli",
    "CostBinomial",
    "CostAR",
]
