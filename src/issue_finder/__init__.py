"""Issue Finder: GitHub issues for your locally checked-out projects.

Scans a projects directory for Git repositories with a GitHub ``origin``
remote and lists their issues through the authenticated ``gh`` CLI.
"""

__version__ = "0.1.0"
