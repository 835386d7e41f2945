"""
Skill Badge competency engine

Decides which competencies can be attached to a badge assignment and
whether a selection satisfies the badge's admission policy.
"""

__version__ = "0.1.0"
