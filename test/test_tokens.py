"""
Token classification tests.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from flargs.tokens import TokenKind, classify, strip


class TestClassify(TestCase):
    """Shapes recognized by classify()."""

    def testLongFlag(self):
        for token in ("--jobs", "--dry-run", "--0", "--x=1"):
            with self.subTest(token=token):
                self.assertIs(classify(token), TokenKind.LONG_FLAG)

    def testShortFlag(self):
        for token in ("-v", "-0", "-5", "-jobs"):
            with self.subTest(token=token):
                self.assertIs(classify(token), TokenKind.SHORT_FLAG)

    def testWordLike(self):
        for token in ("build", "ccc-aaa", "file_name", "42", "a-b-c"):
            with self.subTest(token=token):
                self.assertIs(classify(token), TokenKind.WORD_LIKE)

    def testOther(self):
        for token in ("a", "7", ".", "-", "--", "---x", "a.txt", "trailing-", "", "two words"):
            with self.subTest(token=token):
                self.assertIs(classify(token), TokenKind.OTHER)

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            classify(3)

    def testFlagProperty(self):
        self.assertTrue(TokenKind.LONG_FLAG.flag)
        self.assertTrue(TokenKind.SHORT_FLAG.flag)
        self.assertFalse(TokenKind.WORD_LIKE.flag)
        self.assertFalse(TokenKind.OTHER.flag)


class TestStrip(TestCase):
    """Dash removal by kind."""

    def testStripLong(self):
        self.assertEqual(strip("--jobs", TokenKind.LONG_FLAG), "jobs")

    def testStripShort(self):
        self.assertEqual(strip("-v", TokenKind.SHORT_FLAG), "v")

    def testStripKeepsInnerDashes(self):
        self.assertEqual(strip("--dry-run", TokenKind.LONG_FLAG), "dry-run")

    def testStripLeavesPlainTokens(self):
        self.assertEqual(strip("build", TokenKind.WORD_LIKE), "build")
        self.assertEqual(strip(".", TokenKind.OTHER), ".")


if __name__ == "__main__":
    unittest.main()
