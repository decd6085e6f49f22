from pathlib import Path
from typing import Dict

from runtools.archiver import paths
from runtools.archiver.build import BuildHistory, BuildRecord, Build
from runtools.archiver.outcome import Outcome

ARTIFACT_FILE = 'artifact.txt'


def fake_history(root, *outcomes: Outcome, with_artifacts=True) -> BuildHistory:
    """
    Creates a history with a build for each outcome, the first outcome belonging to the newest build.
    Unless disabled, each build gets an artifacts directory with a single file under `root/builds/{number}`.
    """
    records = []
    for idx, outcome in enumerate(outcomes):
        number = len(outcomes) - idx
        artifacts_dir = paths.artifacts_dir(Path(root) / 'builds' / str(number))
        if with_artifacts:
            artifacts_dir.mkdir(parents=True, exist_ok=True)
            (artifacts_dir / ARTIFACT_FILE).write_text(f"build {number}")
        records.append(BuildRecord(number, f"#{number}", outcome, artifacts_dir))

    return BuildHistory(records)


def create_workspace(root, files: Dict[str, str]) -> Path:
    """
    Creates a workspace directory with the given files, mapping `/` separated relative paths to file contents.
    """
    workspace = Path(root) / 'workspace'
    workspace.mkdir(parents=True, exist_ok=True)
    for rel_path, content in files.items():
        file = workspace / rel_path
        file.parent.mkdir(parents=True, exist_ok=True)
        file.write_text(content)

    return workspace


def fake_build(root, workspace=None, *, result=Outcome.SUCCESS, history=None, **environment) -> Build:
    number = len(history) + 1 if history else 1
    return Build(
        display_name=f"#{number}",
        artifacts_dir=paths.artifacts_dir(Path(root) / 'builds' / str(number)),
        workspace=workspace,
        result=result,
        environment=environment,
        history=history or BuildHistory(),
    )
