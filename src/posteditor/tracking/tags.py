"""Tag list comparison."""

from typing import Sequence


class TagSetDiffer:
    """Order-sensitive equality between two tag name sequences."""

    def equal(self, current: Sequence[str], previous: Sequence[str]) -> bool:
        """Check whether two tag name sequences are the same.

        Equal length is not enough, so the names are joined and the joined
        strings compared. Reordered tags count as a change, and names that
        concatenate to the same string (["ab", "c"] and ["a", "bc"]) compare
        equal.

        Args:
            current: Tag names as currently shown
            previous: Tag names as last observed

        Returns:
            True if both sequences join to the same string
        """
        if len(current) != len(previous):
            return False

        return "".join(current) == "".join(previous)
