from block_splitter.classifier import BlockCategory, classify, classify_one, marker_index

N, M, A = BlockCategory.NORMAL, BlockCategory.MARKER_FIRST, BlockCategory.AFTER_MARKER


def test_no_marker_keeps_everything_normal() -> None:
    assert classify(["a", "b", "c"], "[&$]") == [N, N, N]


def test_first_marker_triggers_and_rest_follow() -> None:
    assert classify(["a", "x[&$]", "b", "[&$]", "c"], "[&$]") == [N, M, A, A, A]


def test_marker_in_first_chunk() -> None:
    assert classify(["[&$]", "a"], "[&$]") == [M, A]


def test_split_marker_is_not_detected() -> None:
    assert classify(["abc[&", "$]def"], "[&$]") == [N, N]


def test_empty_input() -> None:
    assert classify([], "[&$]") == []
    assert marker_index([]) is None


def test_classify_one_is_absorbing_once_seen() -> None:
    assert classify_one("no marker", "[&$]", True) == (A, True)
    assert classify_one("[&$]", "[&$]", False) == (M, True)
    assert classify_one("plain", "[&$]", False) == (N, False)


def test_repeated_calls_do_not_share_state() -> None:
    first = classify(["[&$]"], "[&$]")
    second = classify(["plain"], "[&$]")
    assert first == [M]
    assert second == [N]


def test_marker_index() -> None:
    assert marker_index([N, N, M, A]) == 2
    assert marker_index([N, N]) is None


def test_category_values_are_stable_strings() -> None:
    assert [c.value for c in BlockCategory] == ["NORMAL", "MARKER_FIRST", "AFTER_MARKER"]
