#!/usr/bin/env python3
"""
Unit tests for common/protocol_definitions.py

Covers command parsing edge cases, line framing and address parsing.
"""

import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.protocol_definitions import (
    CommandKind, parse_command, format_chat_line, encode_line, decode_line, split_address
)


class TestParseCommand(unittest.TestCase):
    """Test cases for parse_command."""
    
    def test_bare_keywords(self):
        """Each keyword alone parses to its kind."""
        for word, kind in [
            ("QUIT", CommandKind.QUIT),
            ("LOGOUT", CommandKind.LOGOUT),
            ("LISTALL", CommandKind.LISTALL),
            ("LISTONLINE", CommandKind.LISTONLINE),
        ]:
            self.assertEqual(parse_command(word).kind, kind)
    
    def test_keyword_with_trailing_text(self):
        self.assertEqual(parse_command("QUIT now please").kind, CommandKind.QUIT)
    
    def test_keyword_must_match_whole_token(self):
        """A keyword prefix glued to other text is a chat message."""
        command = parse_command("QUITTER")
        self.assertEqual(command.kind, CommandKind.MESSAGE)
        self.assertEqual(command.text, "QUITTER")
        self.assertEqual(parse_command("LISTALLX").kind, CommandKind.MESSAGE)
    
    def test_keywords_are_case_sensitive(self):
        self.assertEqual(parse_command("quit").kind, CommandKind.MESSAGE)
        self.assertEqual(parse_command("Login alice pw").kind, CommandKind.MESSAGE)
    
    def test_login_with_credentials(self):
        command = parse_command("LOGIN alice secret")
        self.assertEqual(command.kind, CommandKind.LOGIN)
        self.assertEqual(command.username, "alice")
        self.assertEqual(command.password, "secret")
        self.assertTrue(command.has_credentials)
    
    def test_password_keeps_spaces(self):
        command = parse_command("REGISTER bob correct horse battery")
        self.assertEqual(command.kind, CommandKind.REGISTER)
        self.assertEqual(command.username, "bob")
        self.assertEqual(command.password, "correct horse battery")
    
    def test_missing_arguments(self):
        """LOGIN/REGISTER with fewer than three fields lack credentials."""
        for line in ["LOGIN", "LOGIN alice", "REGISTER", "REGISTER alice"]:
            command = parse_command(line)
            self.assertIn(command.kind, (CommandKind.LOGIN, CommandKind.REGISTER))
            self.assertFalse(command.has_credentials, line)
    
    def test_leading_whitespace_before_keyword(self):
        """Fields are split after the keyword even when the line starts with spaces."""
        for line in [" LOGIN alice secret", "  REGISTER alice secret"]:
            command = parse_command(line)
            self.assertEqual((command.username, command.password), ("alice", "secret"), line)
        self.assertFalse(parse_command(" REGISTER alice").has_credentials)
    
    def test_empty_fields_are_not_credentials(self):
        self.assertFalse(parse_command("LOGIN alice ").has_credentials)
        self.assertFalse(parse_command("REGISTER  pw").has_credentials)
    
    def test_plain_message(self):
        command = parse_command("hello there")
        self.assertEqual(command.kind, CommandKind.MESSAGE)
        self.assertEqual(command.text, "hello there")
    
    def test_blank_line_is_message(self):
        command = parse_command("")
        self.assertEqual(command.kind, CommandKind.MESSAGE)
        self.assertEqual(command.text, "")


class TestFraming(unittest.TestCase):
    """Test cases for line framing helpers."""
    
    def test_encode_appends_crlf(self):
        self.assertEqual(encode_line("Bye"), b"Bye\r\n")
    
    def test_decode_accepts_lf_and_crlf(self):
        self.assertEqual(decode_line(b"hello\r\n"), "hello")
        self.assertEqual(decode_line(b"hello\n"), "hello")
        self.assertEqual(decode_line(b"hello"), "hello")
    
    def test_decode_keeps_inner_whitespace(self):
        self.assertEqual(decode_line(b"All users: admin \r\n"), "All users: admin ")
    
    def test_decode_replaces_invalid_utf8(self):
        self.assertEqual(decode_line(b"caf\xff\n"), "caf\ufffd")
    
    def test_format_chat_line(self):
        self.assertEqual(format_chat_line("alice", "hi"), "alice: hi")


class TestSplitAddress(unittest.TestCase):
    """Test cases for split_address."""
    
    def test_empty_host_uses_default(self):
        self.assertEqual(split_address(":8080"), (None, 8080))
        self.assertEqual(split_address(":8080", default_host="localhost"), ("localhost", 8080))
    
    def test_host_and_port(self):
        self.assertEqual(split_address("127.0.0.1:9000"), ("127.0.0.1", 9000))
    
    def test_bracketed_ipv6(self):
        self.assertEqual(split_address("[::1]:8080"), ("::1", 8080))
    
    def test_invalid_addresses(self):
        for address in ["8080", "host:port", "host:70000"]:
            with self.assertRaises(ValueError):
                split_address(address)


if __name__ == '__main__':
    unittest.main()
