"""Small model factories shared by the app test modules."""
from itertools import count

from django.contrib.auth import get_user_model

from question_bank.models import Question, Subject, Topic

_seq = count(1)


def make_user(**kwargs):
    n = next(_seq)
    defaults = {"email": f"student{n}@example.com", "username": f"student{n}"}
    defaults.update(kwargs)
    return get_user_model().objects.create_user(password="pass1234", **defaults)


def make_subject(name="Mathematics"):
    subject, _ = Subject.objects.get_or_create(name=name)
    return subject


def make_topic(subject, name="Algebra"):
    topic, _ = Topic.objects.get_or_create(subject=subject, name=name)
    return topic


def make_question(subject, topic=None, **kwargs):
    defaults = {
        "text": f"Question {next(_seq)}",
        "options": [{"id": "A", "text": "one"}, {"id": "B", "text": "two"}, {"id": "C", "text": "three"}],
        "correct_option_id": "A",
    }
    defaults.update(kwargs)
    return Question.objects.create(subject=subject, topic=topic, **defaults)
