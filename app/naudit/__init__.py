"""naudit - npm multi-package audit.

Cleans, reinstalls and audits every npm package of a repository and
bundles the findings into a compressed archive.
"""

__version__ = "0.1.0"
