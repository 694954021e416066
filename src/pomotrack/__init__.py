"""pomotrack - projects, tasks and pomodoro focus sessions."""

__version__ = "0.1.0"
