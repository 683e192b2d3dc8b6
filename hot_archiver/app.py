"""Typer CLI entrypoint for hot-archiver."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import structlog
import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ConfigLocator, ConfigRepository
from .infra import SQLiteManager
from .logging_conf import available_logs, configure_logging, tail_log
from .orchestrator import Orchestrator
from .records import ArchiveResult
from .scheduler import APSchedulerAdapter

app = typer.Typer(
    help="热榜抓取与归档命令行工具",
    invoke_without_command=True,
    rich_markup_mode=None,
)
log_app = typer.Typer(
    name="log",
    help="日志查看命令",
    no_args_is_help=True,
    rich_markup_mode=None,
)

console = Console()


@dataclass
class AppState:
    repository: ConfigRepository
    orchestrator: Orchestrator
    storage: SQLiteManager
    logger: structlog.BoundLogger
    log_dir: Path


def build_state(verbose: bool, home: Optional[Path] = None) -> AppState:
    locator = ConfigLocator(project_root=home)
    repository = ConfigRepository(locator)
    logger = configure_logging(verbose=verbose, log_dir=locator.logs_dir)
    storage = SQLiteManager()
    orchestrator = Orchestrator(config_repository=repository, storage=storage)
    return AppState(
        repository=repository,
        orchestrator=orchestrator,
        storage=storage,
        logger=logger,
        log_dir=locator.logs_dir,
    )


def _get_state(ctx: typer.Context) -> AppState:
    state = ctx.obj
    if state is None:
        state = build_state(verbose=False)
        ctx.obj = state
    return state


def _render_results_table(results: Sequence[ArchiveResult]) -> Table:
    table = Table(title=f"归档结果 · 共 {len(results)} 个文件", box=box.SIMPLE_HEAD)
    table.add_column("文件", style="cyan", no_wrap=True)
    table.add_column("新增", style="green", justify="right")
    table.add_column("重复", style="yellow", justify="right")
    table.add_column("总数", style="magenta", justify="right")
    for result in results:
        table.add_row(
            result.source,
            str(result.accepted_count),
            str(result.duplicate_count),
            str(result.total_count),
        )
    return table


app.add_typer(log_app, name="log", help="查看日志文件")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", help="开启调试日志", is_flag=True),
    home: Optional[Path] = typer.Option(
        None,
        "--home",
        help="工作目录（快照、归档库与日志所在目录），默认读取 HOT_ARCHIVER_HOME 或当前目录。",
    ),
) -> None:
    ctx.obj = build_state(verbose, home)
    # 无子命令时与原工具一致：抓取一次
    if ctx.invoked_subcommand is None:
        crawl(ctx, output=None)


@app.command("crawl", help="抓取一次热榜并写入快照文件。")
def crawl(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(None, "--output", help="快照输出路径（默认按当前时间命名）。"),
) -> None:
    state = _get_state(ctx)
    try:
        path = state.orchestrator.crawl_once(output=output)
    except Exception as exc:  # noqa: BLE001
        state.logger.exception("crawl_failed")
        console.print(f"抓取失败：{exc}", style="red")
        raise typer.Exit(code=1)
    console.print(f"抓取完成：{path}", style="green")


@app.command("archive", help="归档所有待处理快照并去重。")
def archive(
    ctx: typer.Context,
    quiet: bool = typer.Option(False, "--quiet", help="每个文件输出一行：新增/重复/总数。", is_flag=True),
) -> None:
    state = _get_state(ctx)
    try:
        results = state.orchestrator.archive_pending()
    except Exception as exc:  # noqa: BLE001
        state.logger.exception("archive_failed")
        console.print(f"归档失败：{exc}", style="red")
        raise typer.Exit(code=1)
    if quiet:
        for result in results:
            console.print(
                f"archive {result.source} "
                f"{result.accepted_count}/{result.duplicate_count}/{result.total_count}"
            )
    elif results:
        console.print(_render_results_table(results))
    else:
        console.print("没有待归档的快照文件。", style="dim")
    console.print("归档完成。", style="green")


@app.command("schedule", help="按计划周期执行抓取与归档（阻塞运行）。")
def schedule(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    scheduler = APSchedulerAdapter(blocking=True)
    state.orchestrator.scheduler = scheduler
    state.orchestrator.register_schedule()
    cfg = state.orchestrator.config.schedule
    console.print(f"调度已启动：cron `{cfg.cron}`（{cfg.timezone}），Ctrl+C 退出。", style="cyan")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        scheduler.shutdown()
    finally:
        state.orchestrator.close()


@log_app.command("list", help="列出可用的日志文件。")
def log_list(ctx: typer.Context) -> None:
    state = _get_state(ctx)
    logs = list(available_logs(state.log_dir))
    if not logs:
        console.print("暂未生成任何日志。", style="dim")
        return
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("文件名", style="green")
    for path in logs:
        table.add_row(path.name)
    console.print(table)


@log_app.command("show", help="查看日志的最近内容。")
def log_show(
    ctx: typer.Context,
    name: str = typer.Argument("hot_archiver", help="日志名称（不含 .log）。"),
    tail: int = typer.Option(100, "--tail", help="显示最近 N 行内容。"),
) -> None:
    state = _get_state(ctx)
    lines = tail_log(state.log_dir / f"{name}.log", tail)
    if not lines:
        console.print("暂无日志信息。", style="dim")
        return
    console.print(f"{name}.log · 最近 {len(lines)} 行", style="cyan")
    console.print("".join(lines))


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
