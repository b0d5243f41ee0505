import numpy as np
from sklearn.metrics.pairwise import euclidean_distances


def mean_distance(stored, probe):
    """Mean Euclidean distance between a probe and every stored descriptor."""
    stored = np.asarray(stored, dtype=np.float32)
    probe = np.asarray(probe, dtype=np.float32).reshape(1, -1)
    if stored.size == 0:
        return float("inf")
    if stored.ndim == 1:
        stored = stored.reshape(1, -1)
    if stored.shape[1] != probe.shape[1]:
        return float("inf")
    return float(euclidean_distances(stored, probe).mean())


def verify(stored, probe, threshold=1.0):
    """
    Decide whether a probe descriptor belongs to the owner of `stored`.

    Returns (matched, distance); matched only when distance < threshold.
    """
    distance = mean_distance(stored, probe)
    return distance < threshold, distance
