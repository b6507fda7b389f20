"""
E-Learning User Fetch Own Info

This view allows users to check their own information, including the
subscription plan and the courses they bought.

Author: DSP Development Team
Version: 1.0.0
"""

from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from elearning.users.serializers import CurrentUserSerializer


class CurrentUserView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        serializer = CurrentUserSerializer(request.user)
        return Response(serializer.data)
