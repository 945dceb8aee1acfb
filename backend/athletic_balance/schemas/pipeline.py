from datetime import datetime

from pydantic import BaseModel


class RewardComponents(BaseModel):
    honest_uncertainty_bonus: float = 0
    self_correction_bonus: float = 0
    bias_avoidance_penalty: float = 0
    logic_drift_penalty: float = 0


class FinalEvaluation(BaseModel):
    integrity_score: float = 0.5
    reward_components: RewardComponents = RewardComponents()
    comment: str
    raw_evaluation: str


class PipelineMetadata(BaseModel):
    requestId: str
    timestamp: datetime
    assistantIds: dict[str, str]
    apiKeys: dict[str, str]
    phases_completed: int = 4


class ReasoningPipelineResponse(BaseModel):
    success: bool = True
    initial_execution: str
    reflection_on_initial: str
    final_response: str
    final_evaluation: FinalEvaluation
    metadata: PipelineMetadata


class ReflectionNotes(BaseModel):
    notes: str


class DualAssistantMetadata(BaseModel):
    executionAssistant: str
    reflectionAssistant: str
    timestamp: datetime
    toolsEnabled: list[str]
    apiKeys: dict[str, str]
    method: str
    requestId: str


class DualAssistantResponse(BaseModel):
    success: bool = True
    response: str
    reflection: ReflectionNotes
    metadata: DualAssistantMetadata


class PromptRequest(BaseModel):
    prompt: str | None = None
