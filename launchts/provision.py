"""Best-effort post-creation steps: git initialisation and dependency install.

Both steps run external programs whose availability depends on the user's
machine.  Every expected failure (missing binary, non-zero exit, no git
identity, no network) is reported as a :class:`StepOutcome` rather than
raised, and already written project files are never rolled back.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from pathlib import Path

from launchts import messages
from launchts.options import PackageManager, ToolOptions
from launchts.scaffolder.registry import HOOK_PATH
from launchts.utils import run_command, write_file

GITIGNORE = "node_modules\ndist\n.env\n"
COMMIT_MESSAGE = "chore: initial commit"


@dataclass
class StepOutcome:
    """Result of one provisioning step.

    ``message`` is the user-facing warning for a failed step and empty
    otherwise.
    """

    step: str
    ok: bool = True
    skipped: bool = False
    message: str = ""


@dataclass
class ProvisionReport:
    """All step outcomes of one :meth:`Provisioner.provision` call."""

    outcomes: list[StepOutcome] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [o.message for o in self.outcomes if not o.ok and o.message]

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self.outcomes)

    def get(self, step: str) -> StepOutcome | None:
        for outcome in self.outcomes:
            if outcome.step == step:
                return outcome
        return None


class CommandFailed(Exception):
    """A provisioning command exited non-zero or could not be started."""

    def __init__(self, cmd: list[str], reason: str) -> None:
        self.cmd = cmd
        self.reason = reason
        super().__init__(reason)


class Provisioner:
    """Runs the optional git and install steps for a generated project.

    Commands run one after another; ``git add`` precedes ``git commit`` and
    the package manager install precedes Husky hook activation.
    """

    def __init__(self, verbose: bool = False, timeout: int = 600) -> None:
        self.verbose = verbose
        self.timeout = timeout

    async def provision(self, target_dir: str | Path, options: ToolOptions) -> ProvisionReport:
        target = Path(target_dir)
        report = ProvisionReport()
        if options.git:
            report.outcomes.extend(await self.init_git(target, options))
        else:
            report.outcomes.append(StepOutcome(step="git", skipped=True))

        if options.install:
            report.outcomes.append(await self.install(target, options))
        else:
            report.outcomes.append(StepOutcome(step="install", skipped=True))
        return report

    # -- git ---------------------------------------------------------------

    async def init_git(self, target: Path, options: ToolOptions) -> list[StepOutcome]:
        """Initialise a repository in *target* and make the first commit.

        Nothing happens if git is not installed or *target* is already
        inside a work tree.
        """
        try:
            if not await self._probe(["git", "--version"], target):
                return [StepOutcome(step="git", skipped=True)]
            if await self._probe(["git", "rev-parse", "--is-inside-work-tree"], target):
                return [StepOutcome(step="git", skipped=True)]

            await self._run(["git", "init"], target)
            await asyncio.to_thread(write_file, target / ".gitignore", GITIGNORE)
        except (CommandFailed, OSError) as exc:
            return [
                StepOutcome(step="git", ok=False, message=messages.git_init_failed(_reason(exc)))
            ]

        outcomes = [StepOutcome(step="git")]
        if options.no_commit:
            outcomes.append(StepOutcome(step="commit", skipped=True))
            return outcomes

        try:
            await self._run(["git", "add", "-A"], target)
            await self._run(["git", "commit", "-m", COMMIT_MESSAGE], target)
        except (CommandFailed, OSError) as exc:
            outcomes.append(
                StepOutcome(step="commit", ok=False, message=messages.git_commit_failed(_reason(exc)))
            )
        else:
            outcomes.append(StepOutcome(step="commit"))
        return outcomes

    # -- install -----------------------------------------------------------

    async def install(self, target: Path, options: ToolOptions) -> StepOutcome:
        """Install dependencies, then activate the Husky hooks if enabled."""
        pm = PackageManager(options.pm).value
        try:
            await self._run([pm, "install"], target)
            if options.husky:
                await self._run(["npx", "husky", "install"], target)
                if not (target / HOOK_PATH).exists():
                    await self._run(
                        ["npx", "husky", "add", HOOK_PATH, "npx lint-staged"], target
                    )
        except (CommandFailed, OSError) as exc:
            return StepOutcome(
                step="install", ok=False, message=messages.install_failed(pm, _reason(exc))
            )
        return StepOutcome(step="install")

    # -- command helpers ---------------------------------------------------

    async def _probe(self, cmd: list[str], cwd: Path) -> bool:
        """Run a check command silently; ``False`` on any failure."""
        try:
            returncode, _, _ = await run_command(cmd, cwd=cwd, timeout=self.timeout)
        except OSError:
            return False
        return returncode == 0

    async def _run(self, cmd: list[str], cwd: Path) -> str:
        """Run a command, raising :class:`CommandFailed` on a non-zero exit.

        With ``verbose`` the child's output goes straight to the terminal.
        """
        try:
            returncode, stdout, stderr = await run_command(
                cmd, cwd=cwd, timeout=self.timeout, capture=not self.verbose
            )
        except FileNotFoundError:
            raise CommandFailed(cmd, f"{cmd[0]}: command not found") from None
        if returncode != 0:
            detail = stderr or stdout or f"exit code {returncode}"
            raise CommandFailed(cmd, f"'{' '.join(cmd)}' failed: {detail}")
        return stdout


def _reason(exc: Exception) -> str:
    if isinstance(exc, CommandFailed):
        return exc.reason
    return str(exc)
