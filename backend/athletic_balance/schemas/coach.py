from pydantic import BaseModel


class CoachSummary(BaseModel):
    slug: str
    emoji: str
    name: str
    tagline: str

    class Config:
        from_attributes = True


class CoachDetail(CoachSummary):
    system_prompt: str


class SessionBlockPublic(BaseModel):
    label: str
    minutes: int
    description: str
    prompts: list[str] = []
    metric: str | None = None

    class Config:
        from_attributes = True


class SessionTypePublic(BaseModel):
    id: str
    title: str
    description: str
    blocks: list[SessionBlockPublic]
    outputs: list[str] = []
    recommended_metrics: list[str] = []
    total_minutes: int

    class Config:
        from_attributes = True
