"""Invers Wealth - daily micro-investing habit tracker."""

__version__ = "0.1.0"
