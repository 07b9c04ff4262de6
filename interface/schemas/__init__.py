from .response import ApiResponse, error_response, serialize, success_response
from .auth_schema import (
    RegisterRequest,
    LoginRequest,
    ChangePasswordRequest,
    EmailRequest,
    UsernameRequest,
    TokenRequest,
    RefreshRequest,
    ResetPasswordRequest,
)
from .catalog_schema import (
    ListRequest,
    SortRequest,
    MyWorkoutsRequest,
    CreateWorkoutRequest,
    CreateExerciseRequest,
)
from .session_schema import StartSessionRequest, UpdateSessionRequest, CompleteExerciseRequest
from .system_schema import BmiRequest, HealthInsightsRequest, ChatRequest, DeleteFilesRequest

__all__ = [
    "ApiResponse",
    "error_response",
    "serialize",
    "success_response",
    "RegisterRequest",
    "LoginRequest",
    "ChangePasswordRequest",
    "EmailRequest",
    "UsernameRequest",
    "TokenRequest",
    "RefreshRequest",
    "ResetPasswordRequest",
    "ListRequest",
    "SortRequest",
    "MyWorkoutsRequest",
    "CreateWorkoutRequest",
    "CreateExerciseRequest",
    "StartSessionRequest",
    "UpdateSessionRequest",
    "CompleteExerciseRequest",
    "BmiRequest",
    "HealthInsightsRequest",
    "ChatRequest",
    "DeleteFilesRequest",
]
