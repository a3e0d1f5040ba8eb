"""OKLab ΔE 계산 래퍼"""
from __future__ import annotations

import numpy as np


def delta_e_ok(lab1: np.ndarray, lab2: np.ndarray) -> float:
    """OKLab 유클리드 ΔE 값을 반환한다."""
    diff = np.asarray(lab1, dtype=float) - np.asarray(lab2, dtype=float)
    return float(np.linalg.norm(diff))


def delta_e_ok_many(lab: np.ndarray, labs: np.ndarray) -> np.ndarray:
    return np.linalg.norm(np.asarray(labs, dtype=float) - np.asarray(lab, dtype=float), axis=1)
