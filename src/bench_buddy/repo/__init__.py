from .git import GitRepository
from .workflow import RevisionWorkflow, WorkflowPhase, WorkflowState

__all__ = ["GitRepository", "RevisionWorkflow", "WorkflowPhase", "WorkflowState"]
