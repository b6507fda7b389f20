"""
E-Learning Course Catalogue Models

This module defines the sellable course catalogue and the lessons each
course is made of.

Models:
- Course: A purchasable course with its price and category
- Lesson: Ordered lessons belonging to a course

Access Control:
    A course's lessons are available to a user when the user owns the
    course (one-time purchase), has an active subscription plan, or the
    course is free. Staff users always have access.

Author: DSP Development Team
Version: 1.0.0
"""

from decimal import Decimal, ROUND_HALF_UP

from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _


class Course(models.Model):
    """
    Purchasable course.

    Attributes:
        seq_no: Display order in the catalogue
        url: Unique slug used by the frontend routes
        description: Short title shown on course cards
        long_description: Marketing description shown at checkout
        icon_url: Course logo
        category: BEGINNER or ADVANCED
        price: Price in the major currency unit (e.g. 50 = $50.00)
        lessons_count: Denormalized number of lessons
        promo: Promotion flag for the home page

    Example:
        >>> course = Course.objects.create(
        ...     seq_no=0, url="serverless-angular", description="Serverless Angular",
        ...     price=Decimal("50"),
        ... )
        >>> course.price_in_minor_units  # 5000
    """

    class Category(models.TextChoices):
        BEGINNER = "BEGINNER", _("Beginner")
        ADVANCED = "ADVANCED", _("Advanced")

    seq_no = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Sequence Number"),
        help_text=_("Position of the course in the catalogue"),
    )

    url = models.SlugField(
        max_length=200,
        unique=True,
        verbose_name=_("URL Slug"),
    )

    description = models.CharField(
        max_length=200,
        verbose_name=_("Title"),
    )

    long_description = models.TextField(
        blank=True,
        verbose_name=_("Long Description"),
    )

    icon_url = models.URLField(
        max_length=500,
        blank=True,
        verbose_name=_("Icon URL"),
    )

    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.BEGINNER,
        verbose_name=_("Category"),
    )

    price = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0"))],
        verbose_name=_("Price"),
        help_text=_("Price in the major currency unit"),
    )

    lessons_count = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Lessons Count"),
    )

    promo = models.BooleanField(
        default=False,
        verbose_name=_("Promotion"),
    )

    class Meta:
        verbose_name = _("Course")
        verbose_name_plural = _("Courses")
        ordering = ["seq_no", "id"]
        db_table = "elearning_course"

    def __str__(self) -> str:
        return self.description

    @property
    def is_free(self) -> bool:
        return self.price <= 0

    @property
    def price_in_minor_units(self) -> int:
        """Price in cents, as Stripe expects for `unit_amount`."""
        return int((self.price * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    def check_user_accessibility(self, user) -> bool:
        """
        Check if a user may access this course's lessons.

        Logic:
            1. Free courses: accessible to everyone
            2. Unauthenticated users: no access
            3. Staff: always
            4. Subscribers (pricing plan set): every course
            5. Otherwise: requires a CourseOwnership entry
        """
        if self.is_free:
            return True

        if not user or not user.is_authenticated:
            return False

        if user.is_staff:
            return True

        profile = getattr(user, "profile", None)
        if profile is not None and profile.has_active_subscription:
            return True

        return self.owners.filter(user=user).exists()


class Lesson(models.Model):
    """
    A single lesson of a course, ordered by `seq_no`.
    """

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="lessons",
        verbose_name=_("Course"),
    )

    seq_no = models.PositiveIntegerField(
        default=0,
        verbose_name=_("Sequence Number"),
    )

    description = models.CharField(
        max_length=200,
        verbose_name=_("Description"),
    )

    duration = models.CharField(
        max_length=20,
        blank=True,
        verbose_name=_("Duration"),
        help_text=_("Display duration, e.g. '4:17'"),
    )

    video_url = models.URLField(
        max_length=500,
        blank=True,
        verbose_name=_("Video URL"),
    )

    class Meta:
        verbose_name = _("Lesson")
        verbose_name_plural = _("Lessons")
        ordering = ["course", "seq_no"]
        db_table = "elearning_lesson"
        constraints = [
            models.UniqueConstraint(
                fields=["course", "seq_no"], name="unique_lesson_seq_per_course"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.course.url} #{self.seq_no}: {self.description}"
