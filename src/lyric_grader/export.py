"""JSON export of analysis results."""

from dataclasses import asdict, is_dataclass
from datetime import datetime, timezone
from enum import Enum
import json
from pathlib import Path
import re
from typing import Any

from lyric_grader.config import get_settings
from lyric_grader.errors import InputError
from lyric_grader.models.analysis import AnalysisProfile, AnalysisResult, ExportedAnalysis

REQUIRED_KEYS = ("grade", "score", "profile", "breakdown")


def to_camel_case(snake_str: str) -> str:
    components = snake_str.split("_")
    return components[0] + "".join(x.title() for x in components[1:])


def to_snake_case(camel_str: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", camel_str).lower()


def to_serializable(obj: Any) -> Any:
    """Convert a dataclass hierarchy to JSON-ready data with camelCase keys.

    Nested dataclasses, dicts, lists and tuples are converted recursively.
    String enums become their value; priority levels become lowercase names.
    """
    if is_dataclass(obj) and not isinstance(obj, type):
        return _convert_dict_keys(asdict(obj))
    return _process_value(obj)


def _convert_dict_keys(d: dict) -> dict:
    result = {}
    for key, value in d.items():
        if isinstance(key, str) and "_" in key:
            key = to_camel_case(key)
        result[key] = _process_value(value)
    return result


def _process_value(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return to_serializable(value)
    if isinstance(value, dict):
        return _convert_dict_keys(value)
    if isinstance(value, (list, tuple)):
        return [_process_value(item) for item in value]
    if isinstance(value, Enum):
        return value.value if isinstance(value.value, str) else value.name.lower()
    if isinstance(value, Path):
        return str(value)
    return value


def to_export_dict(result: AnalysisResult, timestamp: str | None = None) -> dict[str, Any]:
    """Build the downloadable export for a result.

    Args:
        result: Analysis to export.
        timestamp: ISO-8601 timestamp to record; defaults to now (UTC).
    """
    return {
        "timestamp": timestamp or datetime.now(timezone.utc).isoformat(),
        "grade": result.grade,
        "score": result.overall_score,
        "profile": result.profile.value,
        "breakdown": {
            to_camel_case(name): score.value for name, score in result.breakdown.items()
        },
        "subscores": {
            to_camel_case(name): {
                to_camel_case(sub): value for sub, value in score.subscores.items()
            }
            for name, score in result.breakdown.items()
        },
        "feedback": to_serializable(result.feedback),
        "improvements": to_serializable(result.improvements),
        "strengths": list(result.strengths),
        "weaknesses": list(result.weaknesses),
        "songPurpose": to_serializable(result.song_purpose),
        "metadata": to_serializable(result.metadata),
        "emotion": to_serializable(result.emotion),
        "rapAnalysis": to_serializable(result.rap_analysis),
    }


def export_filename(result: AnalysisResult, now: datetime | None = None) -> str:
    """Default file name, e.g. ``song-analysis-B+-1718000000000.json``."""
    now = now or datetime.now(timezone.utc)
    return f"song-analysis-{result.grade}-{int(now.timestamp() * 1000)}.json"


def default_export_path(
    result: AnalysisResult, directory: Path | None = None, now: datetime | None = None
) -> Path:
    """Where an export goes when only a directory, or nothing, is given.

    Args:
        result: Analysis being exported; its grade is part of the file name.
        directory: Target directory. Defaults to the configured output_dir.
        now: Time used for the file name; defaults to now (UTC).
    """
    if directory is None:
        directory = get_settings().output_dir
    return Path(directory) / export_filename(result, now)


def write_export(result: AnalysisResult, path: Path, timestamp: str | None = None) -> Path:
    """Write a result's export to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_export_dict(result, timestamp), f, indent=2, ensure_ascii=False)
    return path


def read_export(path: Path) -> ExportedAnalysis:
    """Parse an export written by write_export().

    Raises:
        InputError: If the file is missing, is not JSON, or lacks the grade,
            score, profile or breakdown.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise InputError(f"Cannot read export {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Export {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise InputError(f"Export {path} is not a JSON object")
    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise InputError(f"Export {path} is missing {', '.join(missing)}")

    try:
        profile = AnalysisProfile(data["profile"])
    except ValueError as e:
        raise InputError(f"Export {path} has unknown profile {data['profile']!r}") from e

    return ExportedAnalysis(
        timestamp=data.get("timestamp", ""),
        grade=data["grade"],
        score=data["score"],
        profile=profile,
        breakdown={to_snake_case(k): v for k, v in data["breakdown"].items()},
        subscores={
            to_snake_case(name): {to_snake_case(k): v for k, v in subs.items()}
            for name, subs in data.get("subscores", {}).items()
        },
        feedback=data.get("feedback", {}),
        improvements=data.get("improvements", []),
        strengths=data.get("strengths", []),
        weaknesses=data.get("weaknesses", []),
        song_purpose=data.get("songPurpose"),
        metadata=data.get("metadata", {}),
        emotion=data.get("emotion"),
        rap_analysis=_snake_keys(data.get("rapAnalysis")),
    )


def _snake_keys(data: dict | None) -> dict | None:
    if data is None:
        return None
    return {to_snake_case(k): v for k, v in data.items()}
