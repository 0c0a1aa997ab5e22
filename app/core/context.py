from app.config.settings import Settings
from app.modules.auth.session import AdminSession
from app.modules.dashboard.view_state import ViewState
from app.modules.moderation.dialogs import ConfirmationDialog


class AdminContext:
    """Everything one operator's dashboard holds between requests"""

    def __init__(self, session: AdminSession, state: ViewState, dialog: ConfirmationDialog):
        self.session = session
        self.state = state
        self.dialog = dialog

    def reset(self) -> None:
        """Drop loaded data and UI state, e.g. on logout"""
        self.state = ViewState(page_size=self.state.page_size)
        self.dialog.close()


def create_admin_context(settings: Settings) -> AdminContext:
    session = AdminSession(settings.session_file)
    session.init()
    return AdminContext(
        session=session,
        state=ViewState(page_size=settings.page_size),
        dialog=ConfirmationDialog(),
    )
