from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_points: int = 100
    lines_per_level: int = 10
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    min_interval_ms: int = 100

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def points_for_clear(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear_points * level

    def tick_interval_ms(self, level: int) -> int:
        """Gravity period: 1000ms at level 1, 100ms faster per level, floored."""
        return max(self.min_interval_ms, self.base_interval_ms - (level - 1) * self.interval_step_ms)


@dataclass(frozen=True)
class ScoreState:
    score: int = 0
    level: int = 1
    lines: int = 0


def apply_clear_event(
    score: int,
    lines_before: int,
    lines_cleared: int,
    level: int,
    rules: ScoringRules | None = None,
) -> ScoreState:
    """Fold one line-clear event into the running totals.

    Points use the level in effect before the event; the new level is
    derived from ``lines_before + lines_cleared``.
    """
    rules = rules or ScoringRules()
    if lines_cleared <= 0:
        return ScoreState(score=score, level=level, lines=lines_before)
    return ScoreState(
        score=score + rules.points_for_clear(lines_cleared, level),
        level=rules.level_for_lines(lines_before + lines_cleared),
        lines=lines_before + lines_cleared,
    )
