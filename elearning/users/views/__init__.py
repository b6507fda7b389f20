"""
E-Learning Users Views Package

Dieses Paket enthält alle Views für die Benutzerverwaltung im E-Learning-System.

Features:
- JWT-basierte Authentifizierung mit HTTP-only Cookies
- Registrierung neuer Kunden
- Eigene Benutzerdaten inklusive Abo-Plan und gekaufter Kurse
- Logout-Funktionalität mit Token-Invalidierung

Author: DSP Development Team
Version: 1.0.0
"""

from .auth_views import (
    CustomTokenObtainPairView,
    CustomTokenRefreshView,
    LogoutView,
    UserRegistrationView,
)
from .user_self_info import CurrentUserView
