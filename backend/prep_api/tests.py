import uuid

from django.conf import settings
from django.db import connection
from django.test import SimpleTestCase, TestCase

from .exceptions import Conflict, InvalidInput, NotFound, Unauthorized, api_exception_handler
from .utils import parse_choice, parse_int, parse_int_list, parse_names, parse_uuid, round_half_up


class RoundHalfUpTests(SimpleTestCase):
    def test_halves_go_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(12.5), 13)
        self.assertEqual(round_half_up(2.4999), 2)


class ParseTests(SimpleTestCase):
    def test_parse_int(self):
        self.assertEqual(parse_int("7", "count"), 7)
        self.assertEqual(parse_int(None, "count", default=10), 10)
        with self.assertRaises(InvalidInput):
            parse_int(None, "count")
        with self.assertRaises(InvalidInput):
            parse_int(True, "count")
        with self.assertRaises(InvalidInput):
            parse_int("3", "count", minimum=5)

    def test_parse_int_list(self):
        self.assertEqual(parse_int_list("1, 2,3", "ids"), [1, 2, 3])
        self.assertEqual(parse_int_list([4, "5"], "ids"), [4, 5])
        self.assertEqual(parse_int_list(None, "ids"), [])
        with self.assertRaises(InvalidInput):
            parse_int_list("1,x", "ids")

    def test_parse_choice(self):
        self.assertEqual(parse_choice("easy", "difficulty", ["EASY", "HARD"]), "EASY")
        self.assertEqual(parse_choice("", "difficulty", ["EASY"], default="EASY"), "EASY")
        with self.assertRaises(InvalidInput):
            parse_choice("mild", "difficulty", ["EASY"])

    def test_parse_names(self):
        self.assertEqual(parse_names("Physics, ,English"), ["Physics", "English"])

    def test_parse_uuid(self):
        value = uuid.uuid4()
        self.assertEqual(parse_uuid(str(value), "exam_id"), value)
        self.assertEqual(parse_uuid(value, "exam_id"), value)
        for raw in ("not-a-uuid", "", None, 12):
            with self.subTest(raw=raw), self.assertRaises(InvalidInput):
                parse_uuid(raw, "exam_id")


class ExceptionHandlerTests(SimpleTestCase):
    def test_taxonomy_status_codes(self):
        for exc, status in [
            (NotFound("gone"), 404),
            (InvalidInput("bad"), 400),
            (Unauthorized("mine"), 403),
            (Conflict("twice"), 409),
        ]:
            with self.subTest(exc=type(exc).__name__):
                response = api_exception_handler(exc, {})
                self.assertEqual(response.status_code, status)
                self.assertEqual(response.data, {"ok": False, "error": str(exc.detail)})

    def test_unhandled_errors_pass_through(self):
        self.assertIsNone(api_exception_handler(ValueError("boom"), {}))


class SqlitePragmaTests(TestCase):
    def test_busy_timeout_applied(self):
        with connection.cursor() as cursor:
            cursor.execute("PRAGMA busy_timeout;")
            (timeout,) = cursor.fetchone()
        self.assertEqual(timeout, settings.SQLITE_BUSY_TIMEOUT_MS)
