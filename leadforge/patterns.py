from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class DorkPattern:
    name: str
    pattern: str
    description: str
    sites: List[str] = field(default_factory=list)


# ----------------------------
# Query templates by category
# ----------------------------
DORK_PATTERNS: Dict[str, List[DorkPattern]] = {
    "CONTACT_INFO": [
        DorkPattern(
            name="Email Directories",
            pattern='intext:"@{domain}" AND intext:"{role}" AND intext:"{location}"',
            description="Find email addresses with specific roles and locations",
        ),
        DorkPattern(
            name="Contact Pages",
            pattern='inurl:contact AND intext:"{industry}" AND intext:"{location}"',
            description="Contact pages for specific industries",
        ),
    ],
    "PROFESSIONAL": [
        DorkPattern(
            name="LinkedIn Profiles",
            pattern='site:linkedin.com/in AND intext:"{role}" AND intext:"{location}" AND intext:"{industry}"',
            description="LinkedIn profiles matching criteria",
            sites=["linkedin.com"],
        ),
        DorkPattern(
            name="LinkedIn Company Pages",
            pattern='site:linkedin.com/company AND intext:"{industry}" AND intext:"{location}"',
            description="LinkedIn company pages",
            sites=["linkedin.com"],
        ),
    ],
    "SOCIAL": [
        DorkPattern(
            name="Reddit Posts",
            pattern='site:reddit.com AND intext:"{role}" AND intext:"{location}" AND intext:"hiring"',
            description="Reddit posts about hiring or job opportunities",
            sites=["reddit.com"],
        ),
        DorkPattern(
            name="Reddit Job Subreddits",
            pattern='site:reddit.com/r/jobs OR site:reddit.com/r/forhire AND intext:"{industry}" AND intext:"{location}"',
            description="Reddit job and hiring subreddits",
            sites=["reddit.com"],
        ),
        DorkPattern(
            name="Twitter Profiles",
            pattern='site:twitter.com AND intext:"{role}" AND intext:"{location}" AND intext:"email"',
            description="Twitter profiles with contact info",
            sites=["twitter.com"],
        ),
        DorkPattern(
            name="Twitter Job Posts",
            pattern='site:twitter.com AND intext:"hiring" AND intext:"{industry}" AND intext:"{location}"',
            description="Twitter job postings",
            sites=["twitter.com"],
        ),
    ],
    "DIRECTORIES": [
        DorkPattern(
            name="Business Listings",
            pattern='site:yellowpages.com OR site:yelp.com AND intext:"{industry}" AND intext:"{location}"',
            description="Business directory listings",
            sites=["yellowpages.com", "yelp.com"],
        ),
    ],
}

CATEGORY_LABELS = {
    "SOCIAL": "Social Media",
    "PROFESSIONAL": "Professional Networks",
    "CONTACT_INFO": "Contact Information",
    "DIRECTORIES": "Business Directories",
}

CONTACT_DORKS = [
    'intext:"email" AND intext:"phone"',
    'intext:"contact us" AND intext:"@"',
    'intext:"reach out" AND intext:"call"',
    'inurl:contact AND intext:"@"',
]

LOCATION_MODIFIERS = [
    'intext:"{city}"',
    'intext:"{city}, {state}"',
    'intext:"{state}"',
    'near "{city}"',
]

ROLE_PATTERNS = [
    'intitle:"{role}"',
    'intext:"{role}"',
    'intext:"{role} at"',
]


# ----------------------------
# Platforms (simplified builder)
# ----------------------------
PLATFORMS: Dict[str, str] = {
    "linkedin": "linkedin.com/in",
    "reddit": "reddit.com",
    "twitter": "twitter.com",
    "github": "github.com",
    "medium": "medium.com",
}

# Keys name the criteria a template needs; a template is used only when
# every one of them is populated.
PLATFORM_TEMPLATES: Dict[str, List[tuple]] = {
    "linkedin": [
        (("industry",), "site:linkedin.com/in {industry}"),
        (("location",), 'site:linkedin.com/in "{location}"'),
        (("role",), 'site:linkedin.com/in "{role}"'),
        (("industry", "location"), 'site:linkedin.com/in {industry} "{location}"'),
    ],
    "reddit": [
        (("industry",), "site:reddit.com {industry} hiring"),
        (("location",), 'site:reddit.com "{location}" jobs'),
        (("role",), 'site:reddit.com "{role}" contact'),
    ],
    "twitter": [
        (("industry",), "site:twitter.com {industry} contact"),
        (("location",), 'site:twitter.com "{location}" email'),
        (("role",), 'site:twitter.com "{role}" hiring'),
    ],
    "github": [
        (("industry",), "site:github.com {industry} email"),
        (("location",), 'site:github.com "{location}" contact'),
        (("role",), 'site:github.com "{role}"'),
    ],
    "medium": [
        (("industry",), "site:medium.com {industry} contact"),
        (("location",), 'site:medium.com "{location}"'),
        (("role",), 'site:medium.com "{role}" email'),
    ],
}

PLATFORM_FALLBACKS: Dict[str, str] = {
    "linkedin": "site:linkedin.com/in CEO",
    "reddit": "site:reddit.com hiring remote",
}

# Custom Search `dateRestrict` only goes down to whole days.
TIME_RANGES: Dict[str, str] = {
    "h": "d1",
    "h10": "d1",
    "d": "d1",
    "d3": "d3",
    "w": "w1",
    "m": "m1",
    "y": "y1",
}

TIME_RANGE_LABELS: Dict[str, str] = {
    "": "Any time",
    "h": "1 Hour",
    "h10": "10 Hours",
    "d": "1 Day",
    "d3": "3 Days",
    "w": "1 Week",
    "m": "1 Month",
    "y": "1 Year",
}

INDUSTRIES = [
    "Technology", "Healthcare", "Finance", "Education", "Real Estate",
    "Manufacturing", "Retail", "Consulting", "Digital Marketing", "E-commerce",
    "EdTech", "FinTech", "Cybersecurity", "AI/ML", "SaaS",
]

COMPANY_SIZES = ["1-10", "10-50", "50-100", "100-500", "500-1000", "1000+"]


# ----------------------------
# Lead placeholders
# ----------------------------
PLACEHOLDER_NAMES = ["Alex Johnson", "Sarah Chen", "Michael Rodriguez", "Emily Davis", "James Wilson"]
UNKNOWN_COMPANY = "Unknown"
INFERRED_EMAIL_PREFIX = "contact@"
DEFAULT_JOB_TITLE = "Professional"
DEFAULT_COMPANY_SIZE = "1-50"
