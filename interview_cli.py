"""Interactive interview runner for the terminal."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Callable, List, Optional

from interview_session import RENDERERS, InterviewController
from services.errors import InterviewError

END_COMMANDS = ("/end", "/quit")
PROGRESS_COMMAND = "/progress"


def run_interview(
    controller: InterviewController,
    session_id: str,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> str:
    """Drive one session to completion; returns the final status."""

    render = controller.renderer(session_id)
    question = controller.start_interview(session_id)
    number = 1
    write(render.question(question, number))
    while True:
        try:
            text = read("> ")
        except EOFError:
            text = END_COMMANDS[0]
        command = text.strip().lower()
        if command == PROGRESS_COMMAND:
            write(render.progress(controller.get_progress(session_id)))
            continue
        if command in END_COMMANDS:
            write(render.action(controller.end_interview_early(session_id), None))
            break
        action = controller.submit_response(session_id, text)
        if action.type == "next-question":
            number += 1
        write(render.action(action, number))
        if action.type == "complete":
            break
    return controller.manager.get_session(session_id).status


def choose_continuation(
    controller: InterviewController,
    session_id: str,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> Optional[str]:
    prompt = controller.get_continuation_options(session_id)
    write(prompt.message)
    for index, option in enumerate(prompt.options, start=1):
        write(f"  {index}. {option.label}: {option.description}")
    write("  0. Exit")
    try:
        choice = read("choice> ").strip()
    except EOFError:
        return None
    if not choice.isdigit() or not 1 <= int(choice) <= len(prompt.options):
        return None
    return controller.continue_with_new_session(prompt.options[int(choice) - 1])


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Practice a job interview in the terminal")
    parser.add_argument("--role", required=True, help="Role id or name, e.g. software-engineer")
    parser.add_argument("--level", required=True, help="entry, mid, senior or lead")
    parser.add_argument("--resume", type=Path, help="Optional plain-text resume file")
    parser.add_argument(
        "--mode",
        choices=sorted(RENDERERS),
        default="text",
        help="text prints labelled prompts; voice prints speech-ready lines",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    controller = InterviewController()
    try:
        session_id = controller.create_session(args.role, args.level, args.mode)
    except InterviewError as exc:
        options = getattr(exc, "options", [])
        print(str(exc) + (f" Options: {', '.join(options)}" if options else ""))
        return 2
    if args.resume is not None:
        analysis = controller.upload_resume(session_id, args.resume.read_text(encoding="utf-8"))
        print(analysis.summary)

    while session_id is not None:
        run_interview(controller, session_id)
        next_id = choose_continuation(controller, session_id)
        controller.cleanup_session(session_id)
        session_id = next_id
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
