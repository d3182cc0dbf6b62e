"""
Section Settings Model for per-page display configuration
"""

from sqlalchemy import Column, String, JSON

from ngo_admin.db.database import Base
from ngo_admin.models.base import RecordMixin


class SectionSetting(RecordMixin, Base):
    """Stored overrides of one page's section settings"""
    __tablename__ = "section_settings"

    page = Column(String(100), unique=True, nullable=False, index=True)
    settings = Column(JSON, nullable=False, default=dict)

    def __repr__(self):
        return f"<SectionSetting(page={self.page}, keys={sorted(self.settings or {})})>"


# Default section settings per admin page. Stored rows only hold
# overrides; reads merge them over these defaults.
DEFAULT_SECTION_SETTINGS = {
    "events": {
        "section_visible": True,
        "section_title": "Upcoming Events",
        "section_subtitle": "Join us in making a difference",
        "max_events_to_show": 6,
        "auto_slideshow": True,
        "slideshow_interval": 5000,
    },
    "newsletter": {
        "section_visible": True,
        "title": "Stay Connected with Our Mission",
        "subtitle": "Join Our Newsletter",
        "description": "Get the latest updates on our projects, success stories, and upcoming events delivered straight to your inbox.",
        "placeholder_text": "Enter your email address",
        "button_text": "Subscribe Now",
        "success_message": "Thank you for subscribing! Check your email to confirm.",
        "background_image": "/images/newsletter-bg.jpg",
        "show_social_icons": True,
        "privacy_text": "We respect your privacy. Unsubscribe at any time.",
    },
    "volunteer": {
        "section_visible": True,
        "section_title": "Volunteer Opportunities",
        "section_subtitle": "Join our mission to make a difference",
        "show_application_form": True,
        "require_registration": True,
        "highlight_urgent": True,
        "show_skills_required": True,
        "show_benefits": True,
    },
    "freelance": {
        "section_visible": True,
        "section_title": "Freelance Opportunities",
        "section_subtitle": "Start earning with skills you already have",
        "show_earnings": True,
        "show_platforms": True,
    },
    "skill-training": {
        "section_visible": True,
        "section_title": "Skill Training",
        "section_subtitle": "Courses and government programs to build job-ready skills",
        "show_free_first": False,
        "courses_per_page": 9,
    },
    "case-tracker": {
        "section_visible": True,
        "section_title": "Track Your Case",
        "auto_archive_closed": False,
        "notify_on_status_change": True,
    },
    "law-finder": {
        "section_visible": True,
        "section_title": "Find the Law",
        "section_subtitle": "Search laws by keyword, act or topic",
        "max_results": 20,
        "show_full_text": False,
    },
    "testimonials": {
        "is_enabled": True,
        "title": "Donor Stories",
        "subtitle": "Read what our donors have to say about their giving experience and the impact they've helped create.",
        "auto_scroll": True,
        "scroll_speed": 100,
        "show_ratings": True,
        "max_visible": 10,
    },
    "video-lectures": {
        "section_visible": True,
        "section_title": "Video Lectures",
        "section_subtitle": "Learn from experienced educators at your own pace",
        "view_mode": "grid",
        "show_views": True,
    },
}

# Settings restricted to a fixed set of values
SECTION_SETTING_CHOICES = {
    "events": {"max_events_to_show": [3, 4, 6, 8]},
    "video-lectures": {"view_mode": ["grid", "table"]},
}
