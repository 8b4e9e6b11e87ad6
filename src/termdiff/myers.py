#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/myers.py
"""Myers shortest-edit-script diff over sequences of lines.

Implements the greedy forward algorithm from Eugene W. Myers, *An O(ND)
Difference Algorithm and Its Variations* (1986), recording one snapshot of
the frontier per edit distance and backtracking to recover the path.

Time is O((N + M) * D) and memory O((N + M) * D), where D is the size of the
edit script. Within every changed block, deletions are reported before
insertions.

Examples
--------
    >>> myers_runs(["a", "b", "c"], ["a", "x", "c"])
    [('equal', ['a']), ('delete', ['b']), ('insert', ['x']), ('equal', ['c'])]

"""

from __future__ import annotations

from typing import Hashable, Literal, Sequence, TypeVar

T = TypeVar("T", bound=Hashable)

EditTag = Literal["equal", "delete", "insert"]


def myers_diff(a: Sequence[T], b: Sequence[T]) -> list[tuple[EditTag, T]]:
    """Return the element-wise edit script transforming ``a`` into ``b``.

    Parameters
    ----------
    a : Sequence
        Original sequence
    b : Sequence
        Target sequence

    Returns
    -------
    list[tuple[str, T]]
        ``(tag, element)`` pairs in order, with tag one of ``"equal"``,
        ``"delete"`` or ``"insert"``

    """
    script: list[tuple[EditTag, T]] = []
    for tag, x, y in _shortest_edit_path(a, b):
        if tag == "equal":
            script.append(("equal", a[x]))
        elif tag == "delete":
            script.append(("delete", a[x]))
        else:
            script.append(("insert", b[y]))
    return script


def myers_runs(a: Sequence[T], b: Sequence[T]) -> list[tuple[EditTag, list[T]]]:
    """Group the edit script into runs, deletions first within each change.

    Returns
    -------
    list[tuple[str, list]]
        Maximal runs; a changed region yields a delete run (if any) followed
        by an insert run (if any)

    """
    runs: list[tuple[EditTag, list[T]]] = []
    deletes: list[T] = []
    inserts: list[T] = []

    def flush_changes() -> None:
        if deletes:
            runs.append(("delete", list(deletes)))
            deletes.clear()
        if inserts:
            runs.append(("insert", list(inserts)))
            inserts.clear()

    for tag, element in myers_diff(a, b):
        if tag == "delete":
            deletes.append(element)
        elif tag == "insert":
            inserts.append(element)
        else:
            flush_changes()
            if runs and runs[-1][0] == "equal":
                runs[-1][1].append(element)
            else:
                runs.append(("equal", [element]))

    flush_changes()
    return runs


def _shortest_edit_path(a: Sequence[T], b: Sequence[T]) -> list[tuple[EditTag, int, int]]:
    """Compute one shortest edit path as ``(tag, x, y)`` steps in forward order.

    ``x`` and ``y`` are the coordinates before the step is applied.
    """
    n = len(a)
    m = len(b)

    if n == 0:
        return [("insert", 0, j) for j in range(m)]
    if m == 0:
        return [("delete", i, 0) for i in range(n)]

    max_d = n + m
    v: dict[int, int] = {1: 0}
    trace: list[dict[int, int]] = []

    for d in range(max_d + 1):
        trace.append(dict(v))
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[k - 1] < v[k + 1]):
                x = v[k + 1]
            else:
                x = v[k - 1] + 1
            y = x - k

            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1

            v[k] = x
            if x >= n and y >= m:
                return _backtrack(trace, n, m)

    raise AssertionError("edit path not found")  # pragma: no cover


def _backtrack(trace: list[dict[int, int]], n: int, m: int) -> list[tuple[EditTag, int, int]]:
    steps: list[tuple[EditTag, int, int]] = []
    x, y = n, m

    for d in range(len(trace) - 1, -1, -1):
        v = trace[d]
        k = x - y

        if k == -d or (k != d and v.get(k - 1, -1) < v.get(k + 1, -1)):
            prev_k = k + 1
        else:
            prev_k = k - 1

        prev_x = v.get(prev_k, 0)
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            steps.append(("equal", x - 1, y - 1))
            x -= 1
            y -= 1

        if d > 0:
            if x == prev_x:
                steps.append(("insert", x, y - 1))
            else:
                steps.append(("delete", x - 1, y))
            x, y = prev_x, prev_y

    steps.reverse()
    return steps
