from django.test import TestCase
from django.contrib.auth.models import User
from rest_framework import status

"""
    Test Script für die Token generierung über Cookies und für das neue Ausstellen von Access Tokens
    Token werden für den Login und den Kauf von Kursen benötigt.
"""


class TokenTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username='testUser', password='testPassword')
        response = self.client.post("/api/elearning/token/", {"username": "testUser", "password": "testPassword"})
        self.login_response = response
        self.body = response.json()

    def test_login_sets_cookies(self):
        self.assertEqual(self.login_response.status_code, status.HTTP_200_OK)
        self.assertIn("access_token", self.login_response.cookies)
        self.assertIn("refresh_token", self.login_response.cookies)
        self.assertTrue(self.login_response.cookies["access_token"]["httponly"])

    def test_no_JWT_in_body(self):
        self.assertNotIn("access", self.body)
        self.assertNotIn("refresh", self.body)
        self.assertEqual(self.body["username"], "testUser")

    def test_wrong_password(self):
        response = self.client.post("/api/elearning/token/", {"username": "testUser", "password": "wrong"})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_cookie_authenticates_requests(self):
        response = self.client.get("/api/elearning/users/me/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()["username"], "testUser")

    def test_refresh_token_success(self):
        response = self.client.post("/api/elearning/token/refresh/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(response.cookies["access_token"].value)

    def test_refresh_token_failure(self):
        self.client.cookies["refresh_token"] = "bad token"
        response = self.client.post("/api/elearning/token/refresh/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_refresh_token_missing(self):
        del self.client.cookies["refresh_token"]
        response = self.client.post("/api/elearning/token/refresh/")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_logout_clears_cookies(self):
        response = self.client.post("/api/elearning/users/logout/")
        self.assertEqual(response.status_code, status.HTTP_205_RESET_CONTENT)
        self.assertEqual(response.cookies["access_token"].value, "")
        self.assertEqual(response.cookies["refresh_token"].value, "")
