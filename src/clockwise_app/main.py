from __future__ import annotations

import argparse
import getpass
import json
import logging
import sys
from typing import Any

from clockwise_sdk import ApiSession, ConfigError, load_config

from clockwise_app.controller import ActionResult, AppController
from clockwise_app.notifications_view import format_time_ago, unread_count
from clockwise_app.permission_gate import PERMISSION_ITEMS
from clockwise_app.renderer import ViewKind
from clockwise_app.screens import Screen

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_DISPLAYED_ERROR = 1
EXIT_CONFIG_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clockwise-pro", description="ClockWise Pro workforce client")
    parser.add_argument("--env-file", default=None, help="Optional .env file to load before reading config")
    parser.add_argument("--verbose", action="store_true", help="Log at DEBUG level")
    parser.add_argument(
        "--accept-permissions",
        action="store_true",
        help="Acknowledge location, camera, motion and notification access for this run",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("status", help="Restore the stored session and print the current view")
    for name in ("login", "manager-login"):
        login = sub.add_parser(name, help=f"Sign in ({name})")
        login.add_argument("email")
        login.add_argument("--password", default=None, help="Prompted for when omitted")
    for name in ("clock-in", "clock-out"):
        clock = sub.add_parser(name)
        clock.add_argument("--notes", default="")
    schedule = sub.add_parser("schedule", help="Show the shifts of a week")
    schedule.add_argument("--week-offset", type=int, default=0)
    notifications = sub.add_parser("notifications")
    notifications.add_argument("--limit", type=int, default=50)
    ask = sub.add_parser("ask", help="Ask the assistant a question")
    ask.add_argument("question", nargs="+")
    ask.add_argument("--manager", action="store_true")
    return parser


def _emit(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _finish(controller: AppController, result: ActionResult, extra: dict[str, Any] | None = None) -> int:
    payload: dict[str, Any] = {"view": controller.render().render()}
    if result.error_message:
        payload["error"] = result.error_message
    if extra:
        payload.update(extra)
    _emit(payload)
    return EXIT_OK if result.ok else EXIT_DISPLAYED_ERROR


def _open(controller: AppController, screen: str) -> bool:
    """Navigate to ``screen``; False when the guard or the renderer kept the user out."""
    if controller.set_screen(screen).screen.value != screen:
        return False
    return controller.render().kind is ViewKind.SCREEN


def _redirected(controller: AppController) -> int:
    view = controller.render()
    if view.kind is not ViewKind.SCREEN:
        error = view.title
    elif view.screen is Screen.PERMISSIONS:
        error = "Permissions required (rerun with --accept-permissions)"
    else:
        error = "Sign in required"
    _emit({"view": view.render(), "error": error})
    return EXIT_DISPLAYED_ERROR


def _accept_permissions(controller: AppController) -> None:
    for key, _, _ in PERMISSION_ITEMS:
        controller.grant_permission(key)
    controller.continue_from_permissions()


def _dispatch(controller: AppController, args: argparse.Namespace) -> int:
    command = args.command or "status"
    result = controller.start()
    if args.accept_permissions and controller.state.auth.has_session:
        _accept_permissions(controller)
    if command == "status":
        return _finish(controller, result)

    if command in {"login", "manager-login"}:
        password = args.password if args.password is not None else getpass.getpass("Password: ")
        if command == "login":
            result = controller.login_employee(args.email, password)
        else:
            result = controller.login_manager(args.email, password)
        return _finish(controller, result)

    if command == "clock-in":
        if not _open(controller, "clockIn"):
            return _redirected(controller)
        return _finish(controller, controller.clock_in(args.notes))
    if command == "clock-out":
        if not _open(controller, "clockOut"):
            return _redirected(controller)
        return _finish(controller, controller.clock_out(args.notes))

    if command == "schedule":
        if not _open(controller, "mySchedule"):
            return _redirected(controller)
        result = controller.load_schedule(args.week_offset)
        shifts = [shift.model_dump() for shift in controller.state.schedule]
        return _finish(controller, result, {"shifts": shifts})

    if command == "notifications":
        if not _open(controller, "notifications"):
            return _redirected(controller)
        result = controller.load_notifications(args.limit)
        items = [
            {"title": item.title, "message": item.message, "read": item.is_read, "when": format_time_ago(item.created_at)}
            for item in controller.state.notifications
        ]
        return _finish(controller, result, {"unread": unread_count(controller.state.notifications), "items": items})

    if command == "ask":
        if not _open(controller, "managerAIChat" if args.manager else "employeeAIChat"):
            return _redirected(controller)
        result = controller.ask_assistant(" ".join(args.question))
        reply = result.data.text if result.data is not None else None
        return _finish(controller, result, {"reply": reply})

    raise ValueError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )
    try:
        config = load_config(args.env_file)
    except ConfigError as exc:
        logger.error("config_invalid", extra={"detail": str(exc)})
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    controller = AppController(ApiSession(config), config=config)
    return _dispatch(controller, args)


if __name__ == "__main__":
    raise SystemExit(main())
