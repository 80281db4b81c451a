import logging
from collections.abc import Sequence

from minipatch.patch.matcher import matches
from minipatch.patch.models import Classification, Hunk
from minipatch.patch.trace import NULL_TRACER, Tracer

logger = logging.getLogger(__name__)


def classify(
    original_file: Sequence[str],
    hunks: Sequence[Hunk],
    tracer: Tracer = NULL_TRACER,
) -> Classification:
    """
    Work out which hunks are already present in ``original_file``.

    Hunks must be sorted by ``original_start``. A running bias corrects each
    hunk's recorded position for the length change of earlier hunks that were
    found already applied.

    A hunk is:
    - not applied, if its original lines sit at ``original_start + bias``;
    - applied, if it does not move lines (``original_start == new_start``)
      and its new lines sit at ``new_start``;
    - otherwise the whole file is unclean and no further hunks are examined.
    """

    applied: list[bool] = []
    bias = 0

    for index, hunk in enumerate(hunks):
        tracer.trace(">> Fragment +%d,-%d", hunk.original_start, hunk.new_start)
        position = hunk.original_start + bias

        if matches(original_file, position, hunk.original_lines, tracer):
            applied.append(False)
            continue

        if hunk.original_start == hunk.new_start and matches(
            original_file, hunk.new_start, hunk.new_lines, tracer
        ):
            tracer.trace("- Fragment applied")
            bias += hunk.shift
            applied.append(True)
            continue

        tracer.trace(
            "- Fragment not applied: %d %d", hunk.original_start, hunk.new_start
        )
        logger.debug("Hunk %d matches neither side at line %d", index, position + 1)
        return Classification.unclean_at(index, position)

    return Classification.clean(applied)
