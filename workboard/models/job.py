from typing import List, Literal, Optional

from pydantic import BaseModel

JobType = Literal["Full-time", "Part-time", "Freelance", "Student-friendly"]

# Postings stay open this long when the employer gives no end date
DEFAULT_LISTING_DAYS = 30


class RequirementDetail(BaseModel):
    name: str
    why: str
    instruction: Optional[str] = None


def default_requirements() -> List[RequirementDetail]:
    return [
        RequirementDetail(name="CV / Resume", why="Professional background", instruction="PDF format required."),
        RequirementDetail(name="ID / Passport", why="Identity verification", instruction="Clear scan."),
    ]
