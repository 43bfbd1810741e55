from .auth import CheckEmailView, LoginView, RegisterArtisanView, RegisterView
from .me import MeView

__all__ = [
    "RegisterView",
    "RegisterArtisanView",
    "LoginView",
    "CheckEmailView",
    "MeView",
]
