from fastapi import APIRouter, Depends, status

from core.entities import UserEntity
from core.usecase import ChatbotUseCase
from interface.di import get_chatbot_usecase, get_current_user
from interface.schemas import ChatRequest, success_response

chatbot_router = APIRouter(
    prefix="/chatbot",
    tags=["chatbot"],
    responses={
        status.HTTP_502_BAD_GATEWAY: {"description": "Chatbot request failed"},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Chatbot unavailable"},
    },
)


@chatbot_router.post("/chat")
async def chat(
    body: ChatRequest,
    user: UserEntity = Depends(get_current_user),
    chatbot_usecase: ChatbotUseCase = Depends(get_chatbot_usecase),
):
    """
    Send a message to the assistant on behalf of the current user.
    """
    reply = await chatbot_usecase.send_message(user.id, body.message, body.conversation_id)
    return success_response(
        {
            "reply": reply.get("reply"),
            "conversation_id": reply.get("conversation_id"),
            "timestamp": reply.get("timestamp"),
        },
        "Message sent successfully",
    )


@chatbot_router.get("/health")
async def chatbot_health(chatbot_usecase: ChatbotUseCase = Depends(get_chatbot_usecase)):
    health = await chatbot_usecase.health_check()
    return success_response(health, "ChatBot API is healthy")
