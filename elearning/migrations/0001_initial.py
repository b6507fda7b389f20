from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("seq_no", models.PositiveIntegerField(default=0, help_text="Position of the course in the catalogue", verbose_name="Sequence Number")),
                ("url", models.SlugField(max_length=200, unique=True, verbose_name="URL Slug")),
                ("description", models.CharField(max_length=200, verbose_name="Title")),
                ("long_description", models.TextField(blank=True, verbose_name="Long Description")),
                ("icon_url", models.URLField(blank=True, max_length=500, verbose_name="Icon URL")),
                ("category", models.CharField(choices=[("BEGINNER", "Beginner"), ("ADVANCED", "Advanced")], default="BEGINNER", max_length=20, verbose_name="Category")),
                ("price", models.DecimalField(decimal_places=2, default=Decimal("0"), help_text="Price in the major currency unit", max_digits=8, validators=[django.core.validators.MinValueValidator(Decimal("0"))], verbose_name="Price")),
                ("lessons_count", models.PositiveIntegerField(default=0, verbose_name="Lessons Count")),
                ("promo", models.BooleanField(default=False, verbose_name="Promotion")),
            ],
            options={
                "verbose_name": "Course",
                "verbose_name_plural": "Courses",
                "db_table": "elearning_course",
                "ordering": ["seq_no", "id"],
            },
        ),
        migrations.CreateModel(
            name="Lesson",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("seq_no", models.PositiveIntegerField(default=0, verbose_name="Sequence Number")),
                ("description", models.CharField(max_length=200, verbose_name="Description")),
                ("duration", models.CharField(blank=True, help_text="Display duration, e.g. '4:17'", max_length=20, verbose_name="Duration")),
                ("video_url", models.URLField(blank=True, max_length=500, verbose_name="Video URL")),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="lessons", to="elearning.course", verbose_name="Course")),
            ],
            options={
                "verbose_name": "Lesson",
                "verbose_name_plural": "Lessons",
                "db_table": "elearning_lesson",
                "ordering": ["course", "seq_no"],
                "constraints": [models.UniqueConstraint(fields=("course", "seq_no"), name="unique_lesson_seq_per_course")],
            },
        ),
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("stripe_customer_id", models.CharField(blank=True, default="", help_text="Customer id assigned by Stripe (cus_...)", max_length=255, verbose_name="Stripe Customer ID")),
                ("pricing_plan_id", models.CharField(blank=True, default="", help_text="Stripe Price id of the active subscription (price_...)", max_length=255, verbose_name="Pricing Plan")),
                ("user", models.OneToOneField(help_text="Associated user account", on_delete=django.db.models.deletion.CASCADE, related_name="profile", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "User Profile",
                "verbose_name_plural": "User Profiles",
                "db_table": "elearning_profile",
            },
        ),
        migrations.CreateModel(
            name="CourseOwnership",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("source", models.CharField(default="stripe_checkout", max_length=50, verbose_name="Source")),
                ("reference", models.CharField(blank=True, default="", max_length=255, verbose_name="Reference")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created At")),
                ("course", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="owners", to="elearning.course", verbose_name="Course")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="courses_owned", to=settings.AUTH_USER_MODEL, verbose_name="User")),
            ],
            options={
                "verbose_name": "Course Ownership",
                "verbose_name_plural": "Course Ownerships",
                "db_table": "elearning_course_ownership",
                "constraints": [models.UniqueConstraint(fields=("user", "course"), name="unique_course_ownership")],
            },
        ),
    ]
