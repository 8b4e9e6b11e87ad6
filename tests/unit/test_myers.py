"""Unit tests for the Myers line diff."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from termdiff.myers import myers_diff, myers_runs


def apply_script(script):
    """Rebuild both sides from an edit script."""
    old = [item for tag, item in script if tag in ("equal", "delete")]
    new = [item for tag, item in script if tag in ("equal", "insert")]
    return old, new


@pytest.mark.unit
class TestMyersDiff:
    """Test the shortest edit script."""

    def test_identical(self):
        """Test that equal sequences give only equal steps."""
        assert myers_diff(["a", "b"], ["a", "b"]) == [("equal", "a"), ("equal", "b")]

    def test_empty_sides(self):
        """Test empty inputs on either side."""
        assert myers_diff([], []) == []
        assert myers_diff([], ["x"]) == [("insert", "x")]
        assert myers_diff(["x"], []) == [("delete", "x")]

    def test_single_replacement(self):
        """Test a one-line change in the middle."""
        assert myers_runs(["a", "b", "c"], ["a", "x", "c"]) == [
            ("equal", ["a"]),
            ("delete", ["b"]),
            ("insert", ["x"]),
            ("equal", ["c"]),
        ]

    def test_edit_script_is_minimal(self):
        """Test the classic ABCABBA/CBABAC example, which needs five edits."""
        script = myers_diff(list("ABCABBA"), list("CBABAC"))
        edits = [tag for tag, _ in script if tag != "equal"]
        assert len(edits) == 5

    def test_runs_put_deletes_before_inserts(self):
        """Test that each changed block lists deletions first."""
        runs = myers_runs(["a", "b"], ["c", "d"])
        assert runs == [("delete", ["a", "b"]), ("insert", ["c", "d"])]

    def test_pure_insertion(self):
        """Test lines added at the end."""
        assert myers_runs(["a"], ["a", "b", "c"]) == [("equal", ["a"]), ("insert", ["b", "c"])]


@pytest.mark.unit
@pytest.mark.fuzzing
class TestMyersFuzzing:
    """Property-based tests for the edit script."""

    @given(st.lists(st.sampled_from("abcd"), max_size=12), st.lists(st.sampled_from("abcd"), max_size=12))
    def test_script_rebuilds_both_sides(self, old, new):
        """Property: the script's equal+delete steps give old, equal+insert give new."""
        assert apply_script(myers_diff(old, new)) == (old, new)

    @given(st.lists(st.sampled_from("abc"), max_size=10), st.lists(st.sampled_from("abc"), max_size=10))
    def test_equal_count_is_longest_common_subsequence(self, old, new):
        """Property: the number of equal steps is the LCS length."""
        table = [[0] * (len(new) + 1) for _ in range(len(old) + 1)]
        for i in range(len(old) - 1, -1, -1):
            for j in range(len(new) - 1, -1, -1):
                if old[i] == new[j]:
                    table[i][j] = table[i + 1][j + 1] + 1
                else:
                    table[i][j] = max(table[i + 1][j], table[i][j + 1])

        equal = sum(1 for tag, _ in myers_diff(old, new) if tag == "equal")
        assert equal == table[0][0]
