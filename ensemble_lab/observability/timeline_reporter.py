#!filepath: ensemble_lab/observability/timeline_reporter.py
from typing import Dict

from ensemble_lab import logs


class TimelineReporter:
    """
    Pipeline Timeline 报告：
    - step → 耗时秒数
    """

    def __init__(self, timeline: Dict[str, float], run_id: str):
        self.timeline = timeline
        self.run_id = run_id

    def total(self) -> float:
        return float(sum(self.timeline.values()))

    def print(self):
        logs.info(f"[Timeline] ===== Pipeline timeline for {self.run_id} =====")

        for name, sec in self.timeline.items():
            logs.info(f"[Timeline] {str(name):<30} {sec:>8.3f}s")

        logs.info(f"[Timeline] Total{'':<27} {self.total():>8.3f}s")
        logs.info("[Timeline] ===========================================")
