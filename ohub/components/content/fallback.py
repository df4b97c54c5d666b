"""
Static content served when the CMS is unconfigured or unreachable.
"""

from __future__ import annotations

from datetime import datetime

from .models import Category, FeaturedImage, Guideline, Opportunity, PolicyPage, Statistic

STATISTICS: tuple[Statistic, ...] = (
    Statistic(value="500+", label="Opportunities"),
    Statistic(value="50+", label="Countries"),
    Statistic(value="10K+", label="Students"),
    Statistic(value="24/7", label="Support"),
)

CATEGORIES: tuple[Category, ...] = (
    Category(
        id="scholarships-1",
        name="Scholarships",
        slug="scholarships",
        description=(
            "Discover financial aid opportunities for your education journey. Find "
            "scholarships for undergraduate, graduate, and research programs worldwide."
        ),
        icon="GraduationCap",
        color="blue",
        sort_order=1,
    ),
    Category(
        id="internships-1",
        name="Internships",
        slug="internships",
        description=(
            "Gain valuable work experience through internships at leading companies and "
            "organizations. Perfect for students and recent graduates."
        ),
        icon="Briefcase",
        color="green",
        sort_order=2,
    ),
    Category(
        id="jobs-1",
        name="Jobs",
        slug="jobs",
        description=(
            "Find your next career opportunity. Browse job openings from top companies "
            "and organizations across various industries."
        ),
        icon="Building2",
        color="purple",
        sort_order=3,
    ),
    Category(
        id="conferences-1",
        name="Conferences & Research",
        slug="conferences",
        description=(
            "Present your research and network with professionals at international "
            "conferences and research opportunities."
        ),
        icon="Globe",
        color="orange",
        sort_order=4,
    ),
    Category(
        id="competitions-1",
        name="Competitions & Awards",
        slug="competitions",
        description=(
            "Participate in competitions and apply for prestigious awards to showcase "
            "your skills and achievements."
        ),
        icon="Trophy",
        color="yellow",
        sort_order=5,
    ),
    Category(
        id="exchange-1",
        name="Exchange Programs",
        slug="exchange",
        description=(
            "Experience different cultures and academic environments through student "
            "exchange programs worldwide."
        ),
        icon="Award",
        color="red",
        sort_order=6,
    ),
)

_SEED_TIMESTAMP = "2024-01-01T00:00:00Z"

OPPORTUNITIES: tuple[Opportunity, ...] = (
    Opportunity(
        id="schol-1",
        title="Fulbright Scholarship Program",
        description=(
            "The Fulbright Program offers grants for international educational exchange "
            "for students, scholars, teachers, professionals, scientists and artists."
        ),
        category="Scholarships",
        category_slug="scholarships",
        type="scholarship",
        deadline="2024-10-15",
        location="United States",
        created_at=_SEED_TIMESTAMP,
        updated_at=_SEED_TIMESTAMP,
    ),
    Opportunity(
        id="schol-2",
        title="Chevening Scholarships",
        description=(
            "Chevening Scholarships are the UK government's global scholarship programme, "
            "funded by the Foreign and Commonwealth Office."
        ),
        category="Scholarships",
        category_slug="scholarships",
        type="scholarship",
        deadline="2024-11-02",
        location="United Kingdom",
        created_at=_SEED_TIMESTAMP,
        updated_at=_SEED_TIMESTAMP,
    ),
    Opportunity(
        id="intern-1",
        title="Google Summer of Code",
        description=(
            "Google Summer of Code is a global program focused on bringing more student "
            "developers into open source software development."
        ),
        category="Internships",
        category_slug="internships",
        type="internship",
        deadline="2024-04-15",
        location="Remote",
        created_at=_SEED_TIMESTAMP,
        updated_at=_SEED_TIMESTAMP,
    ),
    Opportunity(
        id="job-1",
        title="Software Engineer at TechCorp",
        description=(
            "Join our dynamic team as a software engineer and work on cutting-edge "
            "projects that impact millions of users worldwide."
        ),
        category="Jobs",
        category_slug="jobs",
        type="job",
        location="San Francisco, CA",
        created_at=_SEED_TIMESTAMP,
        updated_at=_SEED_TIMESTAMP,
    ),
)


def fallback_categories() -> list[Category]:
    return sorted(CATEGORIES, key=lambda c: c.sort_order)


def fallback_category(slug: str) -> Category | None:
    return next((c for c in CATEGORIES if c.slug == slug), None)


def fallback_opportunities(category_slug: str | None = None) -> list[Opportunity]:
    if category_slug is None:
        return list(OPPORTUNITIES)
    return [o for o in OPPORTUNITIES if o.category_slug == category_slug]


# --- Policy Pages ---


def _last_updated(now: datetime) -> str:
    return f"<p>Last updated: {now.month}/{now.day}/{now.year}</p>"


def _privacy_policy(now: datetime) -> str:
    return "".join(
        [
            "<h1>Privacy Policy</h1>",
            _last_updated(now),
            "<h2>1. Information We Collect</h2>",
            "<p>We collect information you provide directly to us, such as when you create "
            "an account, subscribe to our newsletter, or contact us for support.</p>",
            "<h2>2. How We Use Your Information</h2>",
            "<p>We use the information we collect to provide, maintain, and improve our "
            "services, communicate with you, and personalize your experience.</p>",
            "<h2>3. Information Sharing</h2>",
            "<p>We do not sell, trade, or otherwise transfer your personal information to "
            "third parties without your consent, except as described in this policy.</p>",
            "<h2>4. Data Security</h2>",
            "<p>We implement appropriate security measures to protect your personal "
            "information against unauthorized access, alteration, disclosure, or "
            "destruction.</p>",
            "<h2>5. Your Rights</h2>",
            "<p>You have the right to:</p>",
            "<ul>",
            "<li>Access your personal information</li>",
            "<li>Update or correct your information</li>",
            "<li>Delete your personal information</li>",
            "<li>Opt out of marketing communications</li>",
            "<li>Request data portability</li>",
            "</ul>",
            "<h2>6. Contact Us</h2>",
            "<p>If you have any questions about this Privacy Policy, please contact us at "
            "privacy@ohub.com.</p>",
        ]
    )


def _terms_of_service(now: datetime) -> str:
    return "".join(
        [
            "<h1>Terms of Service</h1>",
            _last_updated(now),
            "<h2>1. Acceptance of Terms</h2>",
            "<p>By accessing and using OHUB's services, you accept and agree to be bound by "
            "the terms and provision of this agreement.</p>",
            "<h2>2. Use License</h2>",
            "<p>Permission is granted to temporarily download one copy of the materials on "
            "OHUB's website for personal, non-commercial transitory viewing only.</p>",
            "<h2>3. Disclaimer</h2>",
            "<p>The materials on OHUB's website are provided on an 'as is' basis. OHUB makes "
            "no warranties, expressed or implied, and hereby disclaims and negates all other "
            "warranties including without limitation, implied warranties or conditions of "
            "merchantability, fitness for a particular purpose, or non-infringement of "
            "intellectual property or other violation of rights.</p>",
            "<h2>4. Limitations</h2>",
            "<p>In no event shall OHUB or its suppliers be liable for any damages (including, "
            "without limitation, damages for loss of data or profit, or due to business "
            "interruption) arising out of the use or inability to use the materials on "
            "OHUB's website.</p>",
            "<h2>5. Accuracy of Materials</h2>",
            "<p>The materials appearing on OHUB's website could include technical, "
            "typographical, or photographic errors. OHUB does not warrant that any of the "
            "materials on its website are accurate, complete or current.</p>",
            "<h2>6. Links</h2>",
            "<p>OHUB has not reviewed all of the sites linked to its website and is not "
            "responsible for the contents of any such linked site. The inclusion of any link "
            "does not imply endorsement by OHUB of the site.</p>",
            "<h2>7. Modifications</h2>",
            "<p>OHUB may revise these terms of service for its website at any time without "
            "notice. By using this website you are agreeing to be bound by the then current "
            "version of these Terms of Service.</p>",
            "<h2>8. Contact Information</h2>",
            "<p>If you have any questions about these Terms of Service, please contact us at "
            "legal@ohub.com.</p>",
        ]
    )


def _cookie_policy(now: datetime) -> str:
    return "".join(
        [
            "<h1>Cookie Policy</h1>",
            _last_updated(now),
            "<h2>1. What Are Cookies</h2>",
            "<p>Cookies are small text files that are placed on your device when you visit "
            "our website. They help us provide you with a better experience and understand "
            "how you use our site.</p>",
            "<h2>2. How We Use Cookies</h2>",
            "<p>We use cookies for several purposes:</p>",
            "<ul>",
            "<li><strong>Essential cookies:</strong> These are necessary for the website to "
            "function properly</li>",
            "<li><strong>Analytics cookies:</strong> These help us understand how visitors "
            "interact with our website</li>",
            "<li><strong>Functional cookies:</strong> These remember your preferences and "
            "settings</li>",
            "<li><strong>Marketing cookies:</strong> These help us deliver relevant "
            "advertisements</li>",
            "</ul>",
            "<h2>3. Types of Cookies We Use</h2>",
            "<h3>Session Cookies</h3>",
            "<p>These cookies are temporary and are deleted when you close your browser. They "
            "help us maintain your session while you browse our website.</p>",
            "<h3>Persistent Cookies</h3>",
            "<p>These cookies remain on your device for a set period or until you delete "
            "them. They help us remember your preferences and provide personalized "
            "content.</p>",
            "<h2>4. Third-Party Cookies</h2>",
            "<p>We may use third-party services that place cookies on your device. These "
            "services help us with analytics, advertising, and other website "
            "functionality.</p>",
            "<h2>5. Managing Cookies</h2>",
            "<p>You can control and manage cookies in several ways:</p>",
            "<ul>",
            "<li>Browser settings: Most browsers allow you to block or delete cookies</li>",
            "<li>Cookie consent: We provide options to accept or decline non-essential "
            "cookies</li>",
            "<li>Third-party opt-outs: You can opt out of third-party cookies through their "
            "respective websites</li>",
            "</ul>",
            "<h2>6. Your Choices</h2>",
            "<p>You have the right to:</p>",
            "<ul>",
            "<li>Accept or decline cookies</li>",
            "<li>Delete existing cookies</li>",
            "<li>Set your browser to block cookies</li>",
            "<li>Contact us with questions about our cookie usage</li>",
            "</ul>",
            "<h2>7. Updates to This Policy</h2>",
            "<p>We may update this Cookie Policy from time to time. We will notify you of any "
            "changes by posting the new policy on this page.</p>",
            "<h2>8. Contact Us</h2>",
            "<p>If you have any questions about our Cookie Policy, please contact us at "
            "privacy@ohub.com.</p>",
        ]
    )


# slug -> (id, title, meta title, meta description, content builder)
_POLICY_PAGES = {
    "privacy-policy": (
        "fallback-privacy",
        "Privacy Policy",
        "Privacy Policy - OHUB",
        "Learn about how OHUB collects, uses, and protects your personal information.",
        _privacy_policy,
    ),
    "term-of-service": (
        "fallback-terms",
        "Terms of Service",
        "Terms of Service - OHUB",
        "Read OHUB's terms of service and user agreement.",
        _terms_of_service,
    ),
    "cookies": (
        "fallback-cookies",
        "Cookie Policy",
        "Cookie Policy - OHUB",
        "Learn about how OHUB uses cookies and your options for managing them.",
        _cookie_policy,
    ),
}

POLICY_SLUGS: tuple[str, ...] = tuple(_POLICY_PAGES)


def fallback_policy_page(slug: str, now: datetime) -> PolicyPage | None:
    """Build the static policy page for a slug, dated `now`; None for unknown slugs."""
    entry = _POLICY_PAGES.get(slug)
    if entry is None:
        return None

    page_id, title, meta_title, meta_description, build_content = entry
    timestamp = now.isoformat()
    return PolicyPage(
        id=page_id,
        title=title,
        slug=slug,
        content=build_content(now),
        meta_title=meta_title,
        meta_description=meta_description,
        created_at=timestamp,
        updated_at=timestamp,
    )


def unavailable_guideline(slug: str, now: datetime) -> Guideline:
    """Placeholder guideline shown when the CMS cannot be reached."""
    timestamp = now.isoformat()
    return Guideline(
        id="fallback",
        title="Guideline Temporarily Unavailable",
        slug=slug,
        description="We are experiencing connectivity issues. Please try again later.",
        content=(
            "<p>This guideline is temporarily unavailable due to network connectivity "
            "issues. Please check your internet connection and try again.</p>"
        ),
        featured_image=FeaturedImage(),
        meta_title="Guideline Temporarily Unavailable",
        meta_description=(
            "This guideline is temporarily unavailable due to network connectivity issues."
        ),
        created_at=timestamp,
        updated_at=timestamp,
    )
