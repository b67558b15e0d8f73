"""Generic utilities."""

from forumprofile.utils.sequences import (
    all_match,
    any_match,
    clamp,
    find_first,
    reduce_no_seed,
)

__all__ = ["find_first", "reduce_no_seed", "clamp", "any_match", "all_match"]
