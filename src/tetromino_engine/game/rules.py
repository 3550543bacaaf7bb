from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int, int] = (0, 100, 300, 500, 800)
    lines_per_level: int = 10
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    min_interval_ms: int = 100

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return self.line_clear_scores[min(lines, len(self.line_clear_scores) - 1)] * level

    def level_for_lines(self, total_lines: int) -> int:
        return total_lines // self.lines_per_level + 1

    def interval_for_level(self, level: int) -> int:
        return max(self.min_interval_ms, self.base_interval_ms - (level - 1) * self.interval_step_ms)
