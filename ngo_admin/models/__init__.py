"""
Database models for the NGO admin service
"""

from .event import Event
from .newsletter import Subscriber, NewsletterCampaign
from .volunteer import VolunteerOpportunity
from .job_guidance import FreelanceGig, Course
from .legal import LegalCase, Law
from .testimonial import Testimonial
from .lecture import VideoLecture
from .registration import EventRegistration
from .section_setting import SectionSetting

__all__ = [
    "Event",
    "Subscriber",
    "NewsletterCampaign",
    "VolunteerOpportunity",
    "FreelanceGig",
    "Course",
    "LegalCase",
    "Law",
    "Testimonial",
    "VideoLecture",
    "EventRegistration",
    "SectionSetting",
]
