"""Block-driven partition of a modified text against its base.

Both texts are split into lines (terminators kept, see ``lines``) and
aligned with difflib's SequenceMatcher. Common blocks become UNCHANGED
regions; replaced and inserted blocks become CHANGED regions referencing the
aligned base block. Deleted base blocks produce no region.
"""

from difflib import SequenceMatcher
from typing import List

from .lines import split_lines
from .models import Region, RegionStatus


def partition(base: str, modified: str) -> List[Region]:
    """Partition ``modified`` into regions aligned to ``base``.

    Args:
        base: Reference text
        modified: Text to partition

    Returns:
        Regions in document order; their texts concatenate to ``modified``
    """
    base_lines = split_lines(base)
    modified_lines = split_lines(modified)

    matcher = SequenceMatcher(None, base_lines, modified_lines, autojunk=False)

    regions: List[Region] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "delete":
            continue

        status = RegionStatus.UNCHANGED if tag == "equal" else RegionStatus.CHANGED
        regions.append(
            Region(
                status=status,
                text="".join(modified_lines[j1:j2]),
                reference="".join(base_lines[i1:i2]),
                modified_start=j1,
                modified_end=j2,
                base_start=i1,
                base_end=i2,
            )
        )

    return regions
