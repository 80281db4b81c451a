from collections.abc import Sequence

from minipatch.patch.models import Classification, Hunk


def rewrite(
    original_file: Sequence[str],
    hunks: Sequence[Hunk],
    classification: Classification,
) -> list[str]:
    """
    Build the patched line list from ``original_file``.

    Unapplied hunks have their original span replaced by ``new_lines``.
    Already-applied hunks are copied through untouched from the file; the
    bias they introduce is rebuilt the same way ``classify`` computes it.
    """

    if classification.unclean:
        raise ValueError("Cannot rewrite a file with an unclean classification")
    if len(classification.applied) != len(hunks):
        raise ValueError(
            f"Classification covers {len(classification.applied)} hunks, expected {len(hunks)}"
        )

    out: list[str] = []
    src_ofs = 0
    bias = 0

    for hunk, already_applied in zip(hunks, classification.applied):
        start = hunk.original_start + bias
        out.extend(original_file[src_ofs + bias:start])
        if already_applied:
            out.extend(original_file[start:start + len(hunk.new_lines)])
            bias += hunk.shift
        else:
            out.extend(hunk.new_lines)
        src_ofs = hunk.original_end

    out.extend(original_file[src_ofs + bias:])
    return out
