"""Registry of applications with known leftover locations."""

from __future__ import annotations

from .base import KnownApp, expand_template

# Stock applications that do not follow the harbour-* naming convention
KNOWN_APPS: list[KnownApp] = [
    KnownApp(
        name="sailfish-browser",
        cache=["{cache}/org.sailfishos/browser"],
        local_data=["{data}/org.sailfishos/browser"],
        description="Sailfish Browser",
    ),
    KnownApp(
        name="jolla-notes",
        local_data=["{data}/com.jolla/notes"],
        description="Notes",
    ),
    KnownApp(
        name="jolla-calculator",
        local_data=["{data}/com.jolla/calculator"],
        description="Calculator",
    ),
    KnownApp(
        name="jolla-clock",
        config=["{config}/com.jolla/clock"],
        local_data=["{data}/com.jolla/clock"],
        description="Clock",
    ),
    KnownApp(
        name="jolla-weather",
        cache=["{cache}/com.jolla/weather"],
        local_data=["{data}/com.jolla/weather"],
        description="Weather",
    ),
    KnownApp(
        name="sailfish-office",
        config=["{config}/sailfish-office"],
        cache=["{cache}/sailfish-office"],
        description="Documents",
    ),
]


def get_known_apps(extra: list[KnownApp] | None = None) -> list[KnownApp]:
    """Get the built-in known apps followed by user-configured ones."""
    return KNOWN_APPS + (extra or [])


__all__ = [
    "KnownApp",
    "KNOWN_APPS",
    "expand_template",
    "get_known_apps",
]
