"""
Lance-Williams distance updates for agglomerative clustering.

With squared Euclidean input distances, the centroid, median and Ward rules
reproduce exactly the distances they define between merged clusters; single,
complete and the two average rules work with any dissimilarity.
"""

import torch
from torch import Tensor

from ..base.interfaces import LinkagePolicy


class SingleLinkagePolicy(LinkagePolicy):
    """Nearest neighbour: distance between the closest members."""

    name = 'single'

    def update(self, distance_ij, distance_ik, distance_jk, size_i, size_j, size_k):
        return min(distance_ik, distance_jk)

    @property
    def supports_eval(self) -> bool:
        return True

    def item_to_cluster(self, distances: Tensor) -> float:
        return float(distances.min())


class CompleteLinkagePolicy(LinkagePolicy):
    """Farthest neighbour: distance between the farthest members."""

    name = 'complete'

    def update(self, distance_ij, distance_ik, distance_jk, size_i, size_j, size_k):
        return max(distance_ik, distance_jk)

    @property
    def supports_eval(self) -> bool:
        return True

    def item_to_cluster(self, distances: Tensor) -> float:
        return float(distances.max())


class AverageLinkagePolicy(LinkagePolicy):
    """Group average (UPGMA).

    The distance between two clusters is the mean distance over all pairs of
    members, so each side is weighted by its size.
    """

    name = 'average'

    def update(self, distance_ij, distance_ik, distance_jk, size_i, size_j, size_k):
        return (size_i * distance_ik + size_j * distance_jk) / (size_i + size_j)

    @property
    def supports_eval(self) -> bool:
        return True

    def item_to_cluster(self, distances: Tensor) -> float:
        # every member counts once
        return float(distances.mean())


class WeightedAverageLinkagePolicy(LinkagePolicy):
    """Weighted group average (WPGMA).

    Both merged clusters weigh the same regardless of their sizes.
    """

    name = 'weighted_average'

    def update(self, distance_ij, distance_ik, distance_jk, size_i, size_j, size_k):
        return (distance_ik + distance_jk) / 2.0

    @property
    def supports_eval(self) -> bool:
        return True

    def item_to_cluster(self, distances: Tensor) -> float:
        return float(torch.mean(distances))


class CentroidLinkagePolicy(LinkagePolicy):
    """Squared distance between the cluster centroids (UPGMC)."""

    name = 'centroid'

    def update(self, distance_ij, distance_ik, distance_jk, size_i, size_j, size_k):
        size_ij = size_i + size_j
        return ((size_i * distance_ik + size_j * distance_jk) / size_ij
                - size_i * size_j * distance_ij / (size_ij * size_ij))


class MedianLinkagePolicy(LinkagePolicy):
    """Centroid linkage where a merged cluster sits halfway between its parts (WPGMC)."""

    name = 'median'

    def update(self, distance_ij, distance_ik, distance_jk, size_i, size_j, size_k):
        return distance_ik / 2.0 + distance_jk / 2.0 - distance_ij / 4.0


class WardLinkagePolicy(LinkagePolicy):
    """Ward's minimum variance rule.

    Merges the pair whose union increases the total within-cluster variance
    the least.
    """

    name = 'ward'

    def update(self, distance_ij, distance_ik, distance_jk, size_i, size_j, size_k):
        return (((size_i + size_k) * distance_ik
                 + (size_j + size_k) * distance_jk
                 - size_k * distance_ij)
                / (size_i + size_j + size_k))


LINKAGE_POLICIES = {
    policy.name: policy
    for policy in (SingleLinkagePolicy, CompleteLinkagePolicy, AverageLinkagePolicy,
                   WeightedAverageLinkagePolicy, CentroidLinkagePolicy,
                   MedianLinkagePolicy, WardLinkagePolicy)
}


def get_linkage_policy(policy) -> LinkagePolicy:
    """Policy instance from an instance or a registered name."""
    if isinstance(policy, LinkagePolicy):
        return policy
    if isinstance(policy, str) and policy in LINKAGE_POLICIES:
        return LINKAGE_POLICIES[policy]()
    raise ValueError(f"Unknown linkage policy: {policy!r}. "
                     f"Choose from {sorted(LINKAGE_POLICIES)}")
