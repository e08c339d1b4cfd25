import asyncio
from dataclasses import dataclass
import json
from pathlib import Path
import sys
from typing import Any, NoReturn

import typer

from taskexec import __version__
from taskexec.config import ConfigError, load_executor_config_from_file
from taskexec.core.models import NormalizedConversation, NormalizedEntry, ToolUse
from taskexec.executors import (
    CommandProcess,
    Executor,
    ExecutorError,
    ExecutorRegistryError,
    Invocation,
    TaskNotFoundError,
    get_executor,
    list_executor_keys,
)
from taskexec.logging_setup import configure_logging
from taskexec.record import RecordError, write_conversation_record
from taskexec.tasks import InMemoryTaskStore, TaskStoreError, load_task_store

app = typer.Typer(help="taskexec CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(__version__, color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show taskexec version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level for stderr diagnostics (default: TASKEXEC_LOG_LEVEL or WARNING).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json
    configure_logging(log_level)


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _fail(
    message: str,
    *,
    exit_code: int,
    json_output: bool,
    error: BaseException | None = None,
    **extra: Any,
) -> NoReturn:
    if json_output:
        _echo_json({"status": "error", "exit_code": exit_code, "message": message, **extra})
    else:
        _echo(message, err=True)
    raise typer.Exit(code=exit_code) from error


def _resolve_executor(
    key: str,
    *,
    config_path: Path | None,
    command_name: str,
    json_output: bool,
) -> Executor:
    normalized_key = key.strip().lower()
    supported = list_executor_keys()
    if normalized_key not in supported:
        _fail(
            f"{command_name} failed: unsupported executor '{key}'. "
            f"Expected one of: {', '.join(supported)}.",
            exit_code=2,
            json_output=json_output,
        )

    options: dict[str, Any] = {}
    if config_path is not None:
        try:
            options["config"] = load_executor_config_from_file(config_path)
        except FileNotFoundError as error:
            _fail(
                f"{command_name} failed: executor config not found: {config_path}",
                exit_code=2,
                json_output=json_output,
                error=error,
            )
        except ConfigError as error:
            _fail(
                f"{command_name} failed: {error}",
                exit_code=2,
                json_output=json_output,
                error=error,
            )

    try:
        return get_executor(normalized_key, **options)
    except (ExecutorRegistryError, ConfigError) as error:
        _fail(f"{command_name} failed: {error}", exit_code=2, json_output=json_output, error=error)


def _entry_label(entry: NormalizedEntry) -> str:
    entry_type = entry.entry_type
    if isinstance(entry_type, ToolUse):
        return f"tool_use:{entry_type.tool_name}"
    return entry_type.kind


def _render_conversation(conversation: NormalizedConversation) -> str:
    lines = [
        f"executor={conversation.executor_type} entries={len(conversation.entries)} "
        f"tool_uses={len(conversation.tool_uses())}"
    ]
    for index, entry in enumerate(conversation.entries):
        lines.append(f"{index:>4}  {_entry_label(entry):<22} {entry.content}")
    return "\n".join(lines)


def _write_record(
    conversation: NormalizedConversation,
    out: Path | None,
    *,
    metadata: dict[str, Any],
    command_name: str,
    json_output: bool,
) -> None:
    if out is None:
        return
    try:
        write_conversation_record(conversation, out, metadata=metadata)
    except (RecordError, OSError) as error:
        _fail(
            f"{command_name} failed: could not write record: {error}",
            exit_code=1,
            json_output=json_output,
            error=error,
            record_path=str(out),
        )


def _emit_invocation(invocation: Invocation, *, mode: str, json_output: bool) -> None:
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": f"{mode} dry run",
                "invocation": invocation.to_dict(),
            }
        )
        return
    _echo(" ".join(json.dumps(part, ensure_ascii=False) for part in invocation.argv))
    _echo(f"cwd={invocation.working_dir}")
    for name, value in sorted(invocation.env.items()):
        _echo(f"env {name}={value}")
    if invocation.stdin is not None:
        _echo(f"stdin={json.dumps(invocation.stdin, ensure_ascii=False)}")


async def _collect_output(started: Any) -> tuple[int, str, str]:
    process: CommandProcess = await started
    stdout, stderr = await process.communicate()
    returncode = process.returncode
    return (returncode if returncode is not None else 0), stdout, stderr


def _finish_run(
    executor: Executor,
    *,
    mode: str,
    returncode: int,
    stdout: str,
    stderr: str,
    worktree: str,
    out: Path | None,
    metadata: dict[str, Any],
    json_output: bool,
) -> None:
    conversation = executor.normalize_logs(stdout, worktree)
    _write_record(
        conversation,
        out,
        metadata={**metadata, "mode": mode, "returncode": returncode},
        command_name=mode,
        json_output=json_output,
    )

    exit_code = 0 if returncode == 0 else 1
    if json_output:
        _echo_json(
            {
                "status": "ok" if exit_code == 0 else "error",
                "exit_code": exit_code,
                "message": f"{mode} finished with returncode {returncode}",
                "returncode": returncode,
                "record_path": str(out) if out is not None else None,
                "conversation": conversation.to_dict(),
            }
        )
    else:
        _echo(_render_conversation(conversation))
        if stderr.strip():
            _echo(stderr.rstrip(), err=True)
        if exit_code != 0:
            _echo(f"{mode} failed: agent exited with returncode {returncode}", err=True)
    if exit_code != 0:
        raise typer.Exit(code=exit_code)


@app.command()
def normalize(
    log_file: str = typer.Argument(..., help="Captured agent log path, or '-' for stdin."),
    worktree: str = typer.Option(
        ...,
        "--worktree",
        help="Worktree root that tool paths are rendered relative to.",
    ),
    executor_key: str = typer.Option(
        "aaa",
        "--executor",
        help="Executor whose log format to normalize.",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        help="Optional output path for a conversation record.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit the normalized conversation as JSON.",
    ),
) -> None:
    """Normalize a captured agent log into a conversation."""
    executor = _resolve_executor(
        executor_key,
        config_path=None,
        command_name="normalize",
        json_output=json_output,
    )

    if log_file == "-":
        logs = sys.stdin.read()
    else:
        try:
            logs = Path(log_file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            _fail(
                f"normalize failed: could not read log file {log_file}: {error}",
                exit_code=1,
                json_output=json_output,
                error=error,
            )

    conversation = executor.normalize_logs(logs, worktree)
    _write_record(
        conversation,
        out,
        metadata={"mode": "normalize", "source": log_file},
        command_name="normalize",
        json_output=json_output,
    )

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": "normalize succeeded",
                "record_path": str(out) if out is not None else None,
                "conversation": conversation.to_dict(),
            }
        )
    else:
        _echo(_render_conversation(conversation))
        if out is not None:
            _echo(f"record: {out}")


@app.command()
def spawn(
    tasks_file: Path = typer.Option(
        ...,
        "--tasks",
        help="JSON file of task records.",
    ),
    task_id: str = typer.Option(..., "--task-id", help="Task to work on."),
    worktree: str = typer.Option(..., "--worktree", help="Worktree root for the agent."),
    executor_key: str = typer.Option("aaa", "--executor", help="Executor to launch."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Optional executor config JSON (executor_type, command, env).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the invocation without starting the agent.",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        help="Optional output path for the conversation record.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable output.",
    ),
) -> None:
    """Start an agent on a new task and normalize its output."""
    executor = _resolve_executor(
        executor_key,
        config_path=config_path,
        command_name="spawn",
        json_output=json_output,
    )

    try:
        tasks = load_task_store(tasks_file)
    except FileNotFoundError as error:
        _fail(
            f"spawn failed: task file not found: {tasks_file}",
            exit_code=2,
            json_output=json_output,
            error=error,
        )
    except TaskStoreError as error:
        _fail(f"spawn failed: {error}", exit_code=2, json_output=json_output, error=error)

    if dry_run:
        task = tasks.find_by_id(task_id)
        if task is None:
            _fail(
                f"spawn failed: {TaskNotFoundError(task_id)}",
                exit_code=2,
                json_output=json_output,
            )
        _emit_invocation(
            executor.build_spawn_invocation(task, worktree),
            mode="spawn",
            json_output=json_output,
        )
        return

    try:
        returncode, stdout, stderr = asyncio.run(
            _collect_output(executor.spawn(tasks, task_id, worktree))
        )
    except TaskNotFoundError as error:
        _fail(f"spawn failed: {error}", exit_code=2, json_output=json_output, error=error)
    except ExecutorError as error:
        _fail(f"spawn failed: {error}", exit_code=1, json_output=json_output, error=error)

    _finish_run(
        executor,
        mode="spawn",
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
        worktree=worktree,
        out=out,
        metadata={"task_id": task_id},
        json_output=json_output,
    )


@app.command()
def followup(
    prompt: str = typer.Option(..., "--prompt", help="Follow-up prompt sent on stdin."),
    worktree: str = typer.Option(..., "--worktree", help="Worktree root for the agent."),
    task_id: str = typer.Option(..., "--task-id", help="Task the follow-up belongs to."),
    session_id: str | None = typer.Option(
        None,
        "--session-id",
        help="Agent session id, for executors that track sessions.",
    ),
    executor_key: str = typer.Option("aaa", "--executor", help="Executor to launch."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Optional executor config JSON (executor_type, command, env).",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the invocation without starting the agent.",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        help="Optional output path for the conversation record.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable output.",
    ),
) -> None:
    """Send a follow-up prompt to an agent and normalize its output."""
    executor = _resolve_executor(
        executor_key,
        config_path=config_path,
        command_name="followup",
        json_output=json_output,
    )

    if dry_run:
        _emit_invocation(
            executor.build_followup_invocation(prompt, worktree),
            mode="followup",
            json_output=json_output,
        )
        return

    try:
        returncode, stdout, stderr = asyncio.run(
            _collect_output(
                executor.spawn_followup(
                    InMemoryTaskStore(),
                    task_id,
                    session_id,
                    prompt,
                    worktree,
                )
            )
        )
    except ExecutorError as error:
        _fail(f"followup failed: {error}", exit_code=1, json_output=json_output, error=error)

    _finish_run(
        executor,
        mode="followup",
        returncode=returncode,
        stdout=stdout,
        stderr=stderr,
        worktree=worktree,
        out=out,
        metadata={"task_id": task_id, "session_id": session_id},
        json_output=json_output,
    )


@app.command("executors")
def executors(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable executor listing output.",
    ),
) -> None:
    """List registered executor keys."""
    keys = list(list_executor_keys())
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": "registered executors",
                "executors": keys,
            }
        )
    else:
        _echo("\n".join(keys), force=True)


def main() -> None:
    app()
