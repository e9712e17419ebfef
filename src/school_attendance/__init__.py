"""School attendance package.

Class groups (weekly schedule + roster) and per-date attendance, organized by
feature modules with a thin Flask controller layer over service/repository
layers.
"""
