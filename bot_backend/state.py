# bot_backend/state.py
class ConversationData:
    """Registro por conversación guardado en ConversationState."""

    def __init__(self, turn_count: int = 0, did_welcome_user: bool = False):
        self.turn_count = turn_count
        self.did_welcome_user = did_welcome_user

    def __repr__(self) -> str:
        return f"ConversationData(turn_count={self.turn_count}, did_welcome_user={self.did_welcome_user})"
