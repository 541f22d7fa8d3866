from . import health, students, songs, teachers, bands

__all__ = [
    "health",
    "students",
    "songs",
    "teachers",
    "bands",
]
