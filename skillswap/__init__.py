"""SkillSwap: peer skill-exchange matching, exchange lifecycle and live session coordination."""

__version__ = "0.1.0"
