import numpy as np
import pytest

from stereomap.descriptor_matcher import BruteForceMatcher, DMatch, NormType


@pytest.fixture
def binary_train():
    return np.array(
        [[0, 0, 0, 0], [255, 255, 0, 0], [0, 0, 255, 255], [15, 0, 240, 0]],
        dtype=np.uint8,
    )


def test_hamming_distance_counts_differing_bits():
    matcher = BruteForceMatcher(NormType.HAMMING)
    assert matcher.distance([0xFF, 0x00], [0x00, 0x00]) == 8


def test_l2_distance():
    matcher = BruteForceMatcher(NormType.L2)
    assert matcher.distance([3.0, 4.0], [0.0, 0.0]) == pytest.approx(5.0)


def test_l1_distance():
    matcher = BruteForceMatcher(NormType.L1)
    assert matcher.distance([1.0, 2.0], [4.0, 0.0]) == pytest.approx(5.0)


@pytest.mark.parametrize("norm", list(NormType))
def test_distance_is_symmetric_and_zero_on_identity(norm):
    matcher = BruteForceMatcher(norm)
    a = [12, 200, 7, 99]
    b = [1, 17, 255, 64]
    assert matcher.distance(a, b) == matcher.distance(b, a)
    assert matcher.distance(a, a) == 0.0


def test_hamming2_is_bounded_by_hamming():
    plain = BruteForceMatcher(NormType.HAMMING)
    paired = BruteForceMatcher(NormType.HAMMING2)
    a = [0b10110110, 0b00001111]
    b = [0b01100011, 0b11110000]
    full = plain.distance(a, b)
    half = paired.distance(a, b)
    assert full / 2 <= half <= full


def test_match_finds_identical_row(binary_train):
    matcher = BruteForceMatcher(NormType.HAMMING)
    result = matcher.match(binary_train[2], binary_train)
    assert result == [DMatch(0, 2, 0.0)]


def test_mask_excludes_best_candidate(binary_train):
    matcher = BruteForceMatcher(NormType.HAMMING)
    mask = [True, True, False, True]
    (best,) = matcher.match(binary_train[2], binary_train, mask)
    assert best.train_idx != 2
    assert mask[best.train_idx]
    assert best.distance == matcher.distance(binary_train[2], binary_train[best.train_idx])
    others = [matcher.distance(binary_train[2], binary_train[i]) for i in (0, 1, 3)]
    assert best.distance == min(others)


def test_all_false_mask_gives_no_match(binary_train):
    matcher = BruteForceMatcher(NormType.HAMMING)
    assert matcher.match(binary_train[0], binary_train, [False] * 4) == []


def test_empty_train_gives_no_match():
    matcher = BruteForceMatcher(NormType.L2)
    assert matcher.match([1.0, 2.0], np.empty((0, 2))) == []


def test_one_match_per_query_row(binary_train):
    matcher = BruteForceMatcher(NormType.HAMMING)
    result = matcher.match(binary_train[[3, 1]], binary_train)
    assert [m.query_idx for m in result] == [0, 1]
    assert [m.train_idx for m in result] == [3, 1]


def test_per_query_mask_matrix(binary_train):
    matcher = BruteForceMatcher(NormType.HAMMING)
    mask = np.zeros((2, 4), dtype=bool)
    mask[1, 0] = True
    result = matcher.match(binary_train[[1, 2]], binary_train, mask)
    assert len(result) == 1
    assert (result[0].query_idx, result[0].train_idx) == (1, 0)


def test_mismatched_lengths_raise(binary_train):
    matcher = BruteForceMatcher(NormType.HAMMING)
    with pytest.raises(ValueError):
        matcher.match([1, 2, 3], binary_train)
    with pytest.raises(ValueError):
        matcher.distance([1, 2], [1, 2, 3])


def test_wrong_mask_length_raises(binary_train):
    matcher = BruteForceMatcher(NormType.HAMMING)
    with pytest.raises(ValueError):
        matcher.match(binary_train[0], binary_train, [True, False])