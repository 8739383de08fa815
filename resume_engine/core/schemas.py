from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Tuple


SkillCategory = Literal["Languages", "Frameworks", "Databases", "Tools", "Other"]
StructuringSource = Literal["ai", "rules"]

NAME_PLACEHOLDER = "Your Name"
SUMMARY_PLACEHOLDER = "Please fill in your professional summary"


class CVModel(BaseModel):
    """Frozen, camelCase-serialized base for every CV value."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PersonalInfo(CVModel):
    full_name: str = Field(default=NAME_PLACEHOLDER, description="Placeholder when no name could be recovered")
    title: str = ""
    email: str = ""
    phone: str = ""
    linkedin: str = Field(default="", description="Canonical https://linkedin.com/in/<handle> URL")
    github: str = Field(default="", description="Canonical https://github.com/<handle> URL")
    summary: str = Field(default=SUMMARY_PLACEHOLDER, description="Placeholder prompts manual entry")


class Skill(CVModel):
    id: str
    name: str
    category: SkillCategory = "Other"


class ExperienceEntry(CVModel):
    id: str
    position: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = Field(default="", description="Literal captured text, e.g. 'Present'")
    current: bool = False
    description: str = ""
    achievements: Tuple[str, ...] = ()


class EducationEntry(CVModel):
    id: str
    degree: str = ""
    field: str = ""
    school: str = ""
    end_date: str = ""


class ProjectEntry(CVModel):
    id: str
    name: str = ""
    description: str = ""
    achievements: Tuple[str, ...] = ()
    technologies: Tuple[str, ...] = ()
    link: str = ""


class CVRecord(CVModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experiences: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    skills: Tuple[Skill, ...] = ()
    projects: Tuple[ProjectEntry, ...] = ()


class AnalysisResult(CVModel):
    cv: CVRecord
    score: int = Field(..., ge=0, le=100, description="Completeness score (0-100)")
    missing_fields: List[str] = Field(default_factory=list)
    source: StructuringSource = Field(..., description="Which path produced the record")
    warnings: List[str] = Field(default_factory=list)


class StructureTextRequest(CVModel):
    text: str = Field(..., description="Plain text extracted from a resume")
