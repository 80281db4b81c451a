from collections.abc import Sequence

from minipatch.patch.trace import NULL_TRACER, Tracer


def matches(
    target: Sequence[str],
    offset: int,
    pattern: Sequence[str],
    tracer: Tracer = NULL_TRACER,
) -> bool:
    """
    Check whether ``pattern`` appears in ``target`` starting exactly at ``offset``.

    Out-of-range offsets are a non-match, never an error. Comparison is exact,
    line for line.
    """

    if offset < 0 or offset + len(pattern) > len(target):
        tracer.trace(
            "sublist_match: past end %d+%d %d", offset, len(pattern), len(target)
        )
        return False

    for i, expected in enumerate(pattern):
        actual = target[offset + i]
        if actual != expected:
            tracer.trace("sublist_match: [%d] --- %s", offset + i + 1, actual)
            tracer.trace("sublist_match: [%d] +++ %s", offset + i + 1, expected)
            return False
        tracer.trace("sublist_match: [%d] === %s", offset + i + 1, expected)

    return True
