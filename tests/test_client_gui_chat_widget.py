#!/usr/bin/env python3
"""
Unit tests for the ChatWidget in client/ui/client_gui.py

Tests the append-only history and line submission.
"""

import os
import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

try:
    from PyQt6.QtWidgets import QApplication
    HAS_PYQT6 = True
except ImportError:
    HAS_PYQT6 = False


@unittest.skipUnless(HAS_PYQT6, "PyQt6 not installed")
class TestChatWidget(unittest.TestCase):
    """Test cases for ChatWidget."""
    
    @classmethod
    def setUpClass(cls):
        """Create QApplication once for all tests."""
        if not QApplication.instance():
            cls.app = QApplication([])
        else:
            cls.app = QApplication.instance()
    
    def setUp(self):
        """Set up test fixtures."""
        from client.ui.client_gui import ChatWidget
        self.chat_widget = ChatWidget()
        self.submitted = []
        self.chat_widget.line_submitted.connect(self.submitted.append)
    
    def test_history_starts_empty(self):
        self.assertEqual(self.chat_widget.history_lines(), [])
    
    def test_lines_are_appended_in_order(self):
        for line in ["Registered", "alice: hi", "All users: admin bob"]:
            self.chat_widget.add_line(line)
        self.assertEqual(self.chat_widget.history_lines(),
                         ["Registered", "alice: hi", "All users: admin bob"])
    
    def test_submit_emits_and_clears(self):
        """Submitting sends the typed text and empties the input field."""
        self.chat_widget.input_field.setText("LOGIN alice secret")
        self.chat_widget.submit_line()
        
        self.assertEqual(self.submitted, ["LOGIN alice secret"])
        self.assertEqual(self.chat_widget.input_field.text(), "")
    
    def test_empty_input_not_submitted(self):
        self.chat_widget.submit_line()
        self.assertEqual(self.submitted, [])
    
    def test_submission_does_not_touch_history(self):
        """Only server lines appear in the history; local echo comes from the broadcast."""
        self.chat_widget.input_field.setText("hello")
        self.chat_widget.submit_line()
        self.assertEqual(self.chat_widget.history_lines(), [])


if __name__ == '__main__':
    unittest.main()
