"""
E-Learning Application URL Configuration

This module defines the URL routing structure for the E-Learning application.
Each functional area (users, courses) has its own URL list.

URL Structure:
- /api/elearning/token/: Authentication endpoints (JWT token management)
- /api/elearning/users/: Registration, logout and own account data
- /api/elearning/courses/: Course catalogue and lessons

Author: DSP Development Team
Version: 1.0.0
"""

from typing import List
from django.urls import path, include, URLPattern
from rest_framework_simplejwt.views import TokenVerifyView

# Import der Views
from .users import views as user_views
from .courses import views as course_views

app_name = 'elearning'

# --- User Management URL Patterns ---

users_urlpatterns: List[URLPattern] = [
    path('register/', user_views.UserRegistrationView.as_view(), name='register'),
    path('logout/', user_views.LogoutView.as_view(), name='logout'),
    path('me/', user_views.CurrentUserView.as_view(), name='me'),
]

# --- Course Catalogue URL Patterns ---

courses_urlpatterns: List[URLPattern] = [
    path('', course_views.CourseListView.as_view(), name='course-list'),
    path('<int:pk>/', course_views.CourseDetailView.as_view(), name='course-detail'),
    path('<int:pk>/lessons/', course_views.CourseLessonListView.as_view(), name='course-lessons'),
]

# --- Main URL Configuration for E-Learning Application ---

urlpatterns: List[URLPattern] = [
    # Authentication endpoints (JWT token management)
    path('token/', user_views.CustomTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('token/refresh/', user_views.CustomTokenRefreshView.as_view(), name='token_refresh'),
    path('token/verify/', TokenVerifyView.as_view(), name='token_verify'),

    path('users/', include((users_urlpatterns, 'users'))),
    path('courses/', include((courses_urlpatterns, 'courses'))),
]
