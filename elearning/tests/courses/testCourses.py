"""
E-Learning Tests - Kurskatalog

Prüft die öffentlichen Katalog-Endpunkte und die Zugriffsregeln für
Lektionen (kostenlos, gekauft, Abo, Staff).

Author: DSP Development Team
Version: 1.0.0
"""

from decimal import Decimal

from django.contrib.auth.models import User
from rest_framework.test import APITestCase

from elearning.models import Course, CourseOwnership, Lesson, Profile


class CourseViewsTests(APITestCase):
    # This setup is only executed once for the entire testfile
    @classmethod
    def setUpTestData(cls):
        cls.paid_course = Course.objects.create(
            seq_no=1,
            url="ngrx-course",
            description="NgRx In Depth",
            category=Course.Category.ADVANCED,
            price=Decimal("60"),
        )
        cls.free_course = Course.objects.create(
            seq_no=0,
            url="angular-for-beginners",
            description="Angular for Beginners",
            category=Course.Category.BEGINNER,
        )
        Lesson.objects.create(course=cls.paid_course, seq_no=2, description="Actions and Reducers")
        Lesson.objects.create(course=cls.paid_course, seq_no=1, description="NgRx Store Introduction")
        Lesson.objects.create(course=cls.free_course, seq_no=1, description="Building Your First Component")

        cls.user = User.objects.create_user(username="Max", password="Musterpassword")
        cls.staff = User.objects.create_user(username="Admin", password="Musterpassword", is_staff=True)

    def testKurslisteIstErreichbar(self):
        # Route has to be checked at backend/urls combined with elearning/urls
        response = self.client.get("/api/elearning/courses/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([c["url"] for c in response.json()], ["angular-for-beginners", "ngrx-course"])

    def testKurslisteNachKategorie(self):
        response = self.client.get("/api/elearning/courses/", {"category": "advanced"})
        self.assertEqual([c["url"] for c in response.json()], ["ngrx-course"])

    def testGekaufteKurseSindMarkiert(self):
        CourseOwnership.objects.create(user=self.user, course=self.paid_course)
        self.client.force_authenticate(user=self.user)

        response = self.client.get(f"/api/elearning/courses/{self.paid_course.id}/")

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["owned"])

    def testKostenloseLektionenSindOffen(self):
        response = self.client.get(f"/api/elearning/courses/{self.free_course.id}/lessons/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 1)

    def testKostenpflichtigeLektionenOhneKauf(self):
        self.client.force_authenticate(user=self.user)
        response = self.client.get(f"/api/elearning/courses/{self.paid_course.id}/lessons/")
        self.assertEqual(response.status_code, 403)

    def testLektionenNachKauf(self):
        CourseOwnership.objects.create(user=self.user, course=self.paid_course)
        self.client.force_authenticate(user=self.user)

        response = self.client.get(f"/api/elearning/courses/{self.paid_course.id}/lessons/")

        self.assertEqual(response.status_code, 200)
        self.assertEqual([l["seq_no"] for l in response.json()], [1, 2])

    def testLektionenMitAbo(self):
        Profile.objects.filter(user=self.user).update(pricing_plan_id="price_monthly")
        user = User.objects.get(pk=self.user.pk)
        self.client.force_authenticate(user=user)

        response = self.client.get(f"/api/elearning/courses/{self.paid_course.id}/lessons/")

        self.assertEqual(response.status_code, 200)

    def testLektionenFuerStaff(self):
        self.client.force_authenticate(user=self.staff)
        response = self.client.get(f"/api/elearning/courses/{self.paid_course.id}/lessons/")
        self.assertEqual(response.status_code, 200)

    def testPreisInCent(self):
        course = Course(price=Decimal("19.995"))
        self.assertEqual(course.price_in_minor_units, 2000)
