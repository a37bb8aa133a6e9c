"""Profile a synthetic torch workload with GPU checkpoints."""

from __future__ import annotations

from pathlib import Path

import hydra
import torch
from hydra.utils import to_absolute_path
from omegaconf import DictConfig, OmegaConf

from gpu_timer.reporting.schemas import build_report, save_report
from gpu_timer.runtime.recorder import IntervalRecorder, RecorderConfig
from gpu_timer.timing.checkpoint_timer import CheckpointTimer, TimerConfig
from gpu_timer.timing.registry import fan_out
from gpu_timer.utils.logging import logger, setup_logging
from gpu_timer.utils.timers import IntervalStatsPool


def pick_device(name: str) -> torch.device:
    if name == "auto":
        return torch.device("cuda" if torch.cuda.is_available() else "cpu")
    return torch.device(name)


@hydra.main(config_path="../configs", config_name="profile", version_base=None)
def main(cfg: DictConfig) -> None:
    setup_logging(level=cfg.log_level)

    timer_cfg = TimerConfig(**OmegaConf.to_container(cfg.timer, resolve=True))  # type: ignore[arg-type]
    timer = CheckpointTimer(config=timer_cfg)
    edges = [tuple(edge) for edge in cfg.edges]

    pool = IntervalStatsPool()
    recorder = IntervalRecorder(RecorderConfig(output=Path(to_absolute_path(cfg.output.intervals))), timer=timer)
    for src, dst in edges:
        timer.add_callback(src, dst, fan_out(pool, recorder))

    device = pick_device(cfg.workload.device)
    n = int(cfg.workload.matrix_size)
    a = torch.randn(n, n, device=device)
    b = torch.randn(n, n, device=device)

    for _ in range(int(cfg.workload.iterations)):
        timer.checkpoint("frame_start")
        c = a @ b
        timer.checkpoint("matmul_done")
        a = torch.tanh(c)
        timer.checkpoint("frame_end")

    if device.type == "cuda":
        torch.cuda.synchronize()
    # one more checkpoint so results that finished during the sync are drained
    timer.checkpoint("frame_start")

    for (src, dst), stats in sorted(pool.stats.items()):
        logger.info("{} -> {}: n={} mean={:.3f}ms p95={:.3f}ms", src, dst, stats.count, stats.avg * 1e3, stats.percentile(95) * 1e3)

    recorder.save()
    report_path = save_report(build_report(pool, timer), Path(to_absolute_path(cfg.output.report)))
    logger.info("Wrote {} intervals and report to {}", len(recorder), report_path)


if __name__ == "__main__":
    main()
