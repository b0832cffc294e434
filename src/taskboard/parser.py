"""Render tasks as markdown with YAML front-matter, and parse them back."""

import re

import yaml

from taskboard.model.entities import Task

# front-matter key -> task field
META_FIELDS = {
    "priority": "priority",
    "assignee": "assignee",
    "due": "due_date",
}


def task_to_markdown(task: Task) -> str:
    """Serialize a task as front-matter, a # title line, and the description."""
    meta = {"priority": task.priority}
    if task.assignee:
        meta["assignee"] = task.assignee
    if task.due_date:
        meta["due"] = task.due_date.isoformat()

    parts = [
        "---",
        yaml.dump(meta, default_flow_style=False, sort_keys=False).rstrip(),
        "---",
        "",
        f"# {task.title}",
        "",
    ]
    if task.description:
        parts.append(task.description)
        parts.append("")
    return "\n".join(parts).rstrip() + "\n"


def markdown_to_fields(text: str) -> dict:
    """Parse task markdown into a dict of task fields.

    The first ``# `` heading is the title; everything after it is the
    description. Text before the heading is kept as description too.
    """
    text, meta = _extract_front_matter(text)

    title = ""
    body_lines: list[str] = []
    in_code_fence = False
    for line in text.split("\n"):
        if line.startswith("```"):
            in_code_fence = not in_code_fence
        if not title and not in_code_fence and line.startswith("# "):
            title = line[2:].strip()
            continue
        body_lines.append(line)

    fields = {"title": title, "description": "\n".join(body_lines).strip()}
    for key, field in META_FIELDS.items():
        if key in meta:
            fields[field] = meta[key]
    return fields


def _extract_front_matter(text: str) -> tuple[str, dict]:
    """Extract YAML front-matter from text. Returns (remaining_text, meta)."""
    if not text.startswith("---"):
        return text, {}

    match = re.match(r"^---\n(.*?)\n---\n?", text, re.DOTALL)
    if not match:
        return text, {}

    remaining = text[match.end() :]
    try:
        meta = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError:
        meta = {}
    if not isinstance(meta, dict):
        meta = {}
    return remaining, meta
