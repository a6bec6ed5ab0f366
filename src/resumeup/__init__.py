"""
resumeup - keeps hh.ru resumes on top by republishing them when allowed.
"""

__version__ = "0.1.0"
