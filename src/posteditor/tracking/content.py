"""Editor content comparison."""


class ContentDiffer:
    """Compare live editor text against the saved markdown."""

    def changed(self, live_content: str, baseline_content: str) -> bool:
        # Both sides arrive marker-free; no whitespace or line-ending normalization
        return live_content != baseline_content
