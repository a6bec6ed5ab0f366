"""
hh.ru API module for resumeup.

Handles the two calls the bumper needs:
- Listing the user's resumes
- Publishing (bumping) a resume
"""

from .client import ResumeClient, PUBLISH_OK_STATUS
from .models import ResumeSummary, parse_listing, parse_resume

__all__ = [
    "ResumeClient",
    "PUBLISH_OK_STATUS",
    "ResumeSummary",
    "parse_listing",
    "parse_resume",
]
