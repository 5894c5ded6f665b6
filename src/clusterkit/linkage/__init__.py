"""Lance-Williams update policies for agglomerative clustering."""

from ..base.interfaces import LinkagePolicy
from .policies import (
    SingleLinkagePolicy,
    CompleteLinkagePolicy,
    AverageLinkagePolicy,
    WeightedAverageLinkagePolicy,
    CentroidLinkagePolicy,
    MedianLinkagePolicy,
    WardLinkagePolicy,
    LINKAGE_POLICIES,
    get_linkage_policy
)

__all__ = [
    'LinkagePolicy',
    'SingleLinkagePolicy',
    'CompleteLinkagePolicy',
    'AverageLinkagePolicy',
    'WeightedAverageLinkagePolicy',
    'CentroidLinkagePolicy',
    'MedianLinkagePolicy',
    'WardLinkagePolicy',
    'LINKAGE_POLICIES',
    'get_linkage_policy'
]
