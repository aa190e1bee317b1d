"""Namespace for Taskfile sources; it holds no source types at present."""