"""
Role-based navigation menus and the dashboard chrome around page content.
"""
from __future__ import annotations

from typing import List, Optional

from medilog.models.schemas import NavItem, QuickAction, Shell, ShellHeader
from medilog.models.user import Role, User

PATIENT_NAV = [
    ("Dashboard", "/dashboard/patient", "home"),
    ("Record Interaction", "/record", "mic"),
    ("Create Flashcards", "/flashcards/create", "plus-circle"),
    ("Review Flashcards", "/flashcards/review", "clipboard-list"),
    ("Medicine Reminders", "/medicine-reminder", "calendar"),
    ("Search Records", "/search", "search"),
]

CAREGIVER_NAV = [
    ("Dashboard", "/dashboard/caregiver", "home"),
    ("Record Interaction", "/record", "mic"),
    ("Patient Records", "/patient-records", "file-text"),
    ("Add New Patient Log", "/patient-log/new", "plus-circle"),
    ("Search Records", "/search", "search"),
    ("Settings", "/settings", "settings"),
]

PATIENT_QUICK_ACTIONS = [
    QuickAction(title="Start Recording", description="Record a medical interaction with voice-to-text",
                href="/record", icon="mic"),
    QuickAction(title="Create Flashcards", description="Create flashcards for important medical information",
                href="/flashcards/create", icon="plus-circle"),
    QuickAction(title="Review Flashcards", description="Review your saved medical flashcards",
                href="/flashcards/review", icon="file-text"),
    QuickAction(title="Medicine Reminder", description="Set reminders for your medications",
                href="/medicine-reminder", icon="clock"),
]

CAREGIVER_QUICK_ACTIONS = [
    QuickAction(title="Start Recording", description="Record a patient interaction with voice-to-text",
                href="/record", icon="mic"),
    QuickAction(title="Add New Patient Log", description="Write up a new log entry for a patient",
                href="/patient-log/new", icon="plus-circle"),
    QuickAction(title="Patient Records", description="Browse the records you have saved",
                href="/patient-records", icon="file-text"),
]


def _menu(role: Role) -> list:
    if role is Role.PATIENT:
        return PATIENT_NAV
    if role is Role.CAREGIVER:
        return CAREGIVER_NAV
    raise ValueError(f"Unknown role: {role!r}")


def nav_items(role: Role, pathname: Optional[str] = None) -> List[NavItem]:
    return [
        NavItem(title=title, href=href, icon=icon, active=(href == pathname))
        for title, href, icon in _menu(role)
    ]


def quick_actions(role: Role) -> List[QuickAction]:
    if role is Role.PATIENT:
        return list(PATIENT_QUICK_ACTIONS)
    if role is Role.CAREGIVER:
        return list(CAREGIVER_QUICK_ACTIONS)
    raise ValueError(f"Unknown role: {role!r}")


def render_shell(user: User, pathname: str, content: Optional[dict] = None) -> Shell:
    return Shell(
        role=user.role.value,
        header=ShellHeader(user_name=user.name or None),
        sidebar=nav_items(user.role, pathname),
        content=content,
    )
