"""Interview categories the resume analysis may recommend."""

TECHNICAL_CATEGORIES: dict[str, str] = {
    "frontend": "Frontend Developer",
    "backend": "Backend Developer",
    "fullstack": "Full Stack Developer",
    "mobile": "Mobile Developer",
    "ios": "iOS Developer",
    "android": "Android Developer",
    "devops": "DevOps Engineer",
    "sre": "Site Reliability Engineer",
    "cloud-architect": "Cloud Architect",
    "data-scientist": "Data Scientist",
    "data-engineer": "Data Engineer",
    "ml-engineer": "Machine Learning Engineer",
    "ai-researcher": "AI Researcher",
    "security-engineer": "Security Engineer",
    "devsecops": "DevSecOps Engineer",
    "qa-engineer": "QA Engineer",
    "blockchain": "Blockchain Developer",
    "game-developer": "Game Developer",
    "embedded-systems": "Embedded Systems Engineer",
    "platform-engineer": "Platform Engineer",
}

NON_TECHNICAL_CATEGORIES: dict[str, str] = {
    "product-manager": "Product Manager",
    "project-manager": "Project Manager",
    "engineering-manager": "Engineering Manager",
    "cto": "Chief Technology Officer",
    "sales-representative": "Sales Representative",
    "account-manager": "Account Manager",
    "business-development": "Business Development",
    "sales-engineer": "Sales Engineer",
    "marketing-manager": "Marketing Manager",
    "growth-marketing": "Growth Marketing",
    "content-marketing": "Content Marketing",
    "brand-manager": "Brand Manager",
    "ux-designer": "UX Designer",
    "ui-designer": "UI Designer",
    "product-designer": "Product Designer",
    "graphic-designer": "Graphic Designer",
    "operations-manager": "Operations Manager",
    "finance-manager": "Finance Manager",
    "business-analyst": "Business Analyst",
    "financial-analyst": "Financial Analyst",
    "hr-manager": "HR Manager",
    "recruiter": "Recruiter",
    "people-operations": "People Operations",
    "talent-acquisition": "Talent Acquisition",
    "customer-success": "Customer Success",
    "support-manager": "Support Manager",
    "account-executive": "Account Executive",
    "management-consultant": "Management Consultant",
    "strategy-manager": "Strategy Manager",
    "startup-founder": "Startup Founder",
}


def all_categories() -> dict[str, str]:
    return {**TECHNICAL_CATEGORIES, **NON_TECHNICAL_CATEGORIES}


def category_name(category_id: str) -> str:
    """Display name for a category id; unknown ids are title-cased."""
    return all_categories().get(category_id, category_id.replace("-", " ").title())
