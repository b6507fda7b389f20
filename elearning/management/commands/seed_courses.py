import logging

from django.core.management.base import BaseCommand
from django.db import transaction

from ...models import Course, Lesson
from ...courses.seed_data import COURSES, find_lessons_for_course

# Configure logger
logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Lädt den Kurskatalog (Kurse und Lektionen) in die Datenbank"

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete all lessons and unowned courses before seeding",
        )

    def _flush(self):
        self.stdout.write("Lösche Lektionen und Kurse...")
        deleted_lessons, _ = Lesson.objects.all().delete()
        # Courses with owners or purchase history stay in place.
        deleted_courses, _ = Course.objects.filter(
            owners__isnull=True, purchase_sessions__isnull=True
        ).delete()
        self.stdout.write(
            f"  - {deleted_lessons} Lektionen und {deleted_courses} Objekte gelöscht."
        )

    def _upsert_course(self, url, data):
        course, created = Course.objects.update_or_create(url=url, defaults=data)
        action = "Adding" if created else "Updating"
        logger.info("%s course %s", action, course.description)
        self.stdout.write(f"{action} course {course.description}")
        return course

    def _replace_lessons(self, course):
        lessons = find_lessons_for_course(course.url)
        course.lessons.all().delete()
        Lesson.objects.bulk_create(
            Lesson(course=course, seq_no=seq_no, description=description, duration=duration)
            for seq_no, description, duration in lessons
        )
        course.lessons_count = len(lessons)
        course.save(update_fields=["lessons_count"])
        self.stdout.write(f"  - Adding {len(lessons)} lessons to {course.description}")
        return len(lessons)

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self._flush()

        self.stdout.write(self.style.SUCCESS("Starting course seeding..."))

        lesson_total = 0
        ordered = sorted(COURSES.items(), key=lambda item: item[1]["seq_no"])
        for url, data in ordered:
            course = self._upsert_course(url, data)
            lesson_total += self._replace_lessons(course)

        logger.info("Seeded %d courses with %d lessons", len(ordered), lesson_total)
        self.stdout.write(
            self.style.SUCCESS(
                f"Data upload completed: {len(ordered)} courses, {lesson_total} lessons."
            )
        )
