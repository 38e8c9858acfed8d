"""Text reporter for Movie Ranker results.

Provides human-readable formatting for the pair on screen, session progress,
and the final ranking.
"""

from __future__ import annotations

from ..models import Pair, Progress, RankingResult, RatedMovie


class TextReporter:
    """Formats ranking output as human-readable text.

    Example:
        ```python
        reporter = TextReporter()
        print(reporter.format_leaderboard(session.result))
        ```
    """

    BAR_WIDTH = 30

    @staticmethod
    def _bar(fraction: float, width: int = 30) -> str:
        """Render a simple bar chart segment."""
        fraction = max(0.0, min(1.0, fraction))
        filled = round(fraction * width)
        return "█" * filled + "░" * (width - filled)

    @staticmethod
    def _label(movie: RatedMovie) -> str:
        """Title with year, falling back to the id for untitled movies."""
        title = movie.title or str(movie.id)
        return f"{title} ({movie.year})" if movie.year else title

    def format_ranking(self, result: RankingResult, descending: bool = True) -> str:
        """Format the ranking as a numbered list, one movie per line.

        This is the plain export format: ``1. Title (Year)``.

        Args:
            result: The final ranking.
            descending: Best movie first when True, worst first otherwise.

        Returns:
            Formatted string.
        """
        return "\n".join(
            f"{index}. {self._label(movie)}"
            for index, movie in enumerate(result.ordered(descending), start=1)
        )

    def format_leaderboard(self, result: RankingResult) -> str:
        """Format the ranking with ratings and comparison counts.

        Args:
            result: The final ranking.

        Returns:
            Formatted string.
        """
        lines = [
            "Movie Ranking",
            f"{'=' * 50}",
            f"Comparisons: {result.comparisons}  (stopped: {result.stop_reason.value})",
            "",
            f"  {'Rank':<6} {'Movie':<36} {'Rating':<8} {'Matches'}",
            f"  {'-' * 60}",
        ]

        if not result.ranking:
            return "\n".join(lines)

        top = result.ranking[0].rating
        bottom = result.ranking[-1].rating
        spread = top - bottom

        for rank, movie in enumerate(result.ranking, start=1):
            fraction = (movie.rating - bottom) / spread if spread else 1.0
            lines.append(
                f"  {rank:<6} {self._label(movie)[:36]:<36} {movie.rating:<8} "
                f"{movie.matches:<7} {self._bar(fraction, 10)}"
            )

        return "\n".join(lines)

    def format_pair(self, pair: Pair) -> str:
        """Format the two movies offered for a comparison."""
        return f"[1] {self._label(pair.first)}\n[2] {self._label(pair.second)}"

    def format_progress(self, progress: Progress) -> str:
        """Format session progress as a single bar line."""
        line = f"Progress: {self._bar(progress.percent / 100, self.BAR_WIDTH)} {progress.percent:.0f}%"
        if progress.message:
            line += f"  {progress.message}"
        return line


def print_results(result: RankingResult, descending: bool = True) -> None:
    """Convenience function to print a final ranking.

    Args:
        result: The ranking to print.
        descending: Best movie first when True.

    Example:
        ```python
        from movie_ranker import RankingSession, print_results

        result = RankingSession(movies).run(choose)
        print_results(result)
        ```
    """
    if not isinstance(result, RankingResult):
        raise TypeError(f"Unsupported result type: {type(result).__name__}")
    print(TextReporter().format_ranking(result, descending=descending))
