"""School administration core.

Organised by feature modules (students, attendance, behaviour, detentions, ...)
with repository interfaces, MySQL implementations and service layers on top.
"""
