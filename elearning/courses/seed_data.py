"""
Built-in course catalogue used by the `seed_courses` management command.

COURSES is keyed by the course url slug; LESSONS maps each slug to its
lessons as (seq_no, description, duration) tuples.
"""

from decimal import Decimal

COURSES = {
    "serverless-angular": {
        "seq_no": 0,
        "description": "Serverless Angular with Firebase Course",
        "long_description": "Serveless Angular with Firestore, Firebase Storage & Hosting, Firebase Cloud Functions & AngularFire",
        "icon_url": "https://s3-us-west-1.amazonaws.com/angular-university/course-images/serverless-angular-small.png",
        "category": "BEGINNER",
        "price": Decimal("50"),
        "promo": True,
    },
    "angular-core-course": {
        "seq_no": 1,
        "description": "Angular Core Deep Dive",
        "long_description": "A detailed walk-through of the most important part of Angular - the Core and Common modules",
        "icon_url": "https://s3-us-west-1.amazonaws.com/angular-university/course-images/angular-core-in-depth-small.png",
        "category": "BEGINNER",
        "price": Decimal("50"),
        "promo": False,
    },
    "rxjs-course": {
        "seq_no": 2,
        "description": "RxJs In Practice Course",
        "long_description": "Understand the RxJs Observable pattern, learn the RxJs Operators via practical examples",
        "icon_url": "https://s3-us-west-1.amazonaws.com/angular-university/course-images/rxjs-in-practice-course.png",
        "category": "BEGINNER",
        "price": Decimal("50"),
        "promo": False,
    },
    "ngrx-course": {
        "seq_no": 3,
        "description": "NgRx In Depth",
        "long_description": "Learn the modern Ngrx Ecosystem, including NgRx Data, Store, Effects, Router Store, Ngrx Entity, and Dev Tools.",
        "icon_url": "https://angular-university.s3-us-west-1.amazonaws.com/course-images/ngrx-v2.png",
        "category": "ADVANCED",
        "price": Decimal("60"),
        "promo": False,
    },
    "angular-for-beginners": {
        "seq_no": 4,
        "description": "Angular for Beginners",
        "long_description": "Establish a solid layer of fundamentals, learn what's under the hood of Angular",
        "icon_url": "https://angular-academy.s3.amazonaws.com/thumbnails/angular2-for-beginners-small-v2.png",
        "category": "BEGINNER",
        "price": Decimal("0"),
        "promo": False,
    },
    "stripe-course": {
        "seq_no": 5,
        "description": "Stripe Payments In Practice",
        "long_description": "Build your own ecommerce store & membership website with Stripe Checkout and Stripe Subscriptions",
        "icon_url": "https://angular-university.s3-us-west-1.amazonaws.com/course-images/stripe-course.jpg",
        "category": "ADVANCED",
        "price": Decimal("75"),
        "promo": True,
    },
}

LESSONS = {
    "serverless-angular": [
        (1, "Development Environment Setup", "4:17"),
        (2, "Introduction to Firebase and Firestore", "6:37"),
        (3, "Firestore Queries and Indexes", "8:03"),
        (4, "Firebase Authentication", "5:36"),
        (5, "Firebase Storage", "7:10"),
        (6, "Cloud Functions Introduction", "9:21"),
    ],
    "angular-core-course": [
        (1, "Angular Components Introduction", "5:44"),
        (2, "Component Inputs and Outputs", "7:02"),
        (3, "Content Projection with ng-content", "6:12"),
        (4, "Angular Directives Deep Dive", "8:45"),
        (5, "Angular Dependency Injection", "10:30"),
    ],
    "rxjs-course": [
        (1, "What is an Observable?", "3:50"),
        (2, "Building Observables from Scratch", "6:25"),
        (3, "The map and filter Operators", "4:58"),
        (4, "Higher-Order Mapping with concatMap", "7:41"),
        (5, "Error Handling Strategies", "9:12"),
    ],
    "ngrx-course": [
        (1, "NgRx Store Introduction", "5:15"),
        (2, "Actions and Reducers", "7:33"),
        (3, "NgRx Effects", "8:50"),
        (4, "NgRx Entity", "6:48"),
    ],
    "angular-for-beginners": [
        (1, "Angular Tutorial For Beginners - Build Your First App", "4:17"),
        (2, "Building Your First Component", "2:07"),
        (3, "Component Styling", "3:52"),
    ],
    "stripe-course": [
        (1, "Stripe Checkout Introduction", "5:02"),
        (2, "Creating a Checkout Session", "8:14"),
        (3, "Fulfilling Orders with Webhooks", "9:37"),
        (4, "Selling Subscriptions", "7:26"),
    ],
}


def find_lessons_for_course(url):
    return sorted(LESSONS.get(url, []), key=lambda lesson: lesson[0])
