"""
Keyword tables used by the structuring engine.

Everything that decides "what is a header", "what is a job title" or "which
category does a skill belong to" lives here as plain data, so the tables can be
extended without touching the traversal logic in the parsers.

Bump TAXONOMY_VERSION whenever a table changes in a way that alters output.
"""

from enum import Enum
from typing import Dict, FrozenSet, Tuple


TAXONOMY_VERSION = "2024.1"


class Section(str, Enum):
    SKILLS = "skills"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    PROJECTS = "projects"
    SUMMARY = "summary"


# ===== SECTION HEADERS =====
# Longer variants first so "work experience" wins over "work".

SECTION_KEYWORDS: Dict[Section, Tuple[str, ...]] = {
    Section.SKILLS: (
        "technical skills",
        "core competencies",
        "technical proficiencies",
        "skills",
        "competencies",
    ),
    Section.EXPERIENCE: (
        "professional experience",
        "work experience",
        "employment history",
        "work history",
        "experience",
        "employment",
    ),
    Section.EDUCATION: (
        "academic background",
        "education",
        "qualifications",
    ),
    Section.PROJECTS: (
        "personal projects",
        "academic projects",
        "key projects",
        "projects",
    ),
    Section.SUMMARY: (
        "professional summary",
        "career objective",
        "summary",
        "objective",
        "profile",
        "about me",
    ),
}

# Headers that are never extracted but still close the section before them.
TERMINATOR_HEADERS: Tuple[str, ...] = (
    "certifications",
    "certificates",
    "licenses",
    "languages",
    "awards",
    "honors",
    "publications",
    "volunteer",
    "volunteering",
    "interests",
    "hobbies",
    "references",
    "additional information",
)

# Keywords the line reconstructor splits out of run-on text.
LINE_BREAK_KEYWORDS: Tuple[str, ...] = (
    "professional summary",
    "summary",
    "objective",
    "work experience",
    "professional experience",
    "experience",
    "education",
    "technical skills",
    "skills",
    "projects",
    "certifications",
    "languages",
    "awards",
)


# ===== PERSONAL INFO =====

NAME_BLACKLIST: FrozenSet[str] = frozenset({
    "skills",
    "experience",
    "education",
    "resume",
    "cv",
})

TITLE_KEYWORDS: Tuple[str, ...] = (
    "engineer",
    "developer",
    "designer",
    "manager",
    "analyst",
    "architect",
    "lead",
    "senior",
)

SUMMARY_KEYWORDS: Tuple[str, ...] = (
    "summary",
    "objective",
    "profile",
    "about",
)


# ===== ENTRY TRIGGERS =====

ROLE_KEYWORDS: Tuple[str, ...] = (
    "engineer",
    "developer",
    "programmer",
    "manager",
    "analyst",
    "designer",
    "architect",
    "consultant",
    "specialist",
    "scientist",
    "administrator",
    "coordinator",
    "director",
    "officer",
    "lead",
    "head",
    "intern",
    "internship",
    "assistant",
    "associate",
    "technician",
    "tester",
    "founder",
    "co-founder",
    "president",
    "executive",
    "representative",
    "supervisor",
    "instructor",
    "teacher",
    "researcher",
    "freelancer",
    "contractor",
    "owner",
)

INSTITUTION_KEYWORDS: Tuple[str, ...] = (
    "university",
    "college",
    "school",
    "institute",
    "academy",
    "polytechnic",
)

# Regex fragments, matched case-insensitively on word boundaries.
DEGREE_PATTERNS: Tuple[str, ...] = (
    r"bachelor(?:'s)?",
    r"master(?:'s)?",
    r"ph\.?\s?d\.?",
    r"doctorate",
    r"associate(?:'s)? degree",
    r"associate of",
    r"diploma",
    r"b\.?\s?sc\.?",
    r"m\.?\s?sc\.?",
    r"b\.s\.",
    r"m\.s\.",
    r"b\.a\.",
    r"m\.a\.",
    r"m\.?b\.?a\.?",
    r"b\.?\s?tech\.?",
    r"m\.?\s?tech\.?",
    r"b\.?\s?eng\.?",
    r"m\.?\s?eng\.?",
)


# Lines opening with one of these describe work; they never start an entry.
ACTION_VERBS: Tuple[str, ...] = (
    "built",
    "created",
    "developed",
    "designed",
    "implemented",
    "established",
    "launched",
    "produced",
    "engineered",
    "constructed",
    "wrote",
    "made",
    "worked",
    "led",
    "managed",
    "collaborated",
    "maintained",
    "improved",
    "responsible",
    "helped",
    "reduced",
    "increased",
)


# ===== PROJECT DETAIL LABELS =====

TECHNOLOGY_LABELS: Tuple[str, ...] = (
    "technologies",
    "tech stack",
    "tech",
    "stack",
    "tools",
    "built with",
)


# ===== SKILL CATEGORIES =====
# Checked in this order; first match wins, anything else is "Other".

SKILL_CATEGORIES: Tuple[Tuple[str, FrozenSet[str]], ...] = (
    ("Languages", frozenset({
        "python", "java", "javascript", "typescript", "c", "c++", "c#", "go",
        "golang", "rust", "ruby", "php", "swift", "kotlin", "scala", "r",
        "matlab", "perl", "dart", "lua", "haskell", "elixir", "clojure",
        "objective-c", "bash", "shell", "powershell", "sql", "html", "css",
        "sass", "vba", "julia", "fortran", "cobol", "assembly", "solidity",
    })),
    ("Frameworks", frozenset({
        "react", "react.js", "reactjs", "angular", "vue", "vue.js", "vuejs",
        "svelte", "next.js", "nextjs", "nuxt", "node.js", "nodejs", "express",
        "express.js", "django", "flask", "fastapi", "spring", "spring boot",
        "rails", "ruby on rails", "laravel", "symfony", ".net", "asp.net",
        ".net core", "tensorflow", "pytorch", "keras", "scikit-learn",
        "pandas", "numpy", "jquery", "bootstrap", "tailwind", "tailwind css",
        "flutter", "react native", "electron", "nestjs", "graphql",
        "redux", "hibernate", "xamarin", "unity",
    })),
    ("Databases", frozenset({
        "mysql", "postgresql", "postgres", "mongodb", "sqlite", "redis",
        "oracle", "sql server", "mssql", "mariadb", "cassandra", "dynamodb",
        "firebase", "firestore", "elasticsearch", "neo4j", "couchdb",
        "snowflake", "bigquery", "supabase", "cockroachdb", "influxdb",
    })),
    ("Tools", frozenset({
        "git", "github", "gitlab", "bitbucket", "docker", "kubernetes", "k8s",
        "jenkins", "terraform", "ansible", "aws", "azure", "gcp",
        "google cloud", "linux", "jira", "confluence", "figma", "postman",
        "vs code", "visual studio", "intellij", "webpack", "vite", "npm",
        "yarn", "maven", "gradle", "nginx", "apache", "kafka", "rabbitmq",
        "circleci", "github actions", "travis ci", "heroku", "vercel",
        "netlify", "grafana", "prometheus", "splunk", "tableau", "power bi",
        "excel", "slack", "trello", "notion", "photoshop", "illustrator",
    })),
)

SKILL_CATEGORY_OTHER = "Other"
