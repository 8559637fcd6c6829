#!/usr/bin/env python3
"""
Client GUI - PyQt6 Chat Window

A thin front-end over ChatClient:
- Append-only history of every line received from the server
- Input field that sends a line on Enter
- Network loop running in its own QThread
"""

import sys
import asyncio
import threading
from typing import Optional

from PyQt6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QTextBrowser, QLineEdit, QPushButton
)
from PyQt6.QtCore import QThread, pyqtSignal
from PyQt6.QtGui import QKeySequence, QShortcut

from client.chat.chat_client import ChatClient
from client.utils.config import ClientConfig
from client.utils.logger import logger


# ============================================================================
# CHAT WIDGET
# ============================================================================

class ChatWidget(QWidget):
    """Chat history with an input line."""
    
    line_submitted = pyqtSignal(str)  # text typed by the user
    
    def __init__(self):
        super().__init__()
        self.setup_ui()
    
    def setup_ui(self):
        """Setup chat interface UI."""
        layout = QVBoxLayout()
        layout.setSpacing(5)
        layout.setContentsMargins(5, 5, 5, 5)
        
        self.history = QTextBrowser()
        self.history.setReadOnly(True)
        self.history.setStyleSheet("""
            QTextBrowser {
                background-color: #2C2C2C;
                color: #ECF0F1;
                border: 1px solid #34495E;
                border-radius: 5px;
                padding: 5px;
                font-size: 10pt;
            }
        """)
        layout.addWidget(self.history)
        
        input_layout = QHBoxLayout()
        
        self.input_field = QLineEdit()
        self.input_field.setPlaceholderText("Type a message or command...")
        self.input_field.setStyleSheet("""
            QLineEdit {
                background-color: #34495E;
                color: #ECF0F1;
                border: 1px solid #2C3E50;
                border-radius: 5px;
                padding: 5px;
            }
        """)
        self.input_field.returnPressed.connect(self.submit_line)
        input_layout.addWidget(self.input_field)
        
        send_btn = QPushButton("Send")
        send_btn.clicked.connect(self.submit_line)
        send_btn.setStyleSheet("""
            QPushButton {
                background-color: #3498DB;
                color: white;
                border: none;
                padding: 8px 15px;
                border-radius: 5px;
                font-weight: bold;
            }
            QPushButton:hover {
                background-color: #2980B9;
            }
        """)
        input_layout.addWidget(send_btn)
        
        layout.addLayout(input_layout)
        self.setLayout(layout)
    
    def submit_line(self):
        """Emit the typed line and clear the input."""
        text = self.input_field.text()
        if text:
            self.line_submitted.emit(text)
            self.input_field.clear()
    
    def add_line(self, text: str):
        """Append a received line to the history."""
        self.history.append(text)
        
        # Auto scroll to bottom
        scrollbar = self.history.verticalScrollBar()
        scrollbar.setValue(scrollbar.maximum())
    
    def history_lines(self):
        """Return the history as a list of lines."""
        text = self.history.toPlainText()
        return text.split('\n') if text else []


# ============================================================================
# NETWORK THREAD
# ============================================================================

class NetworkThread(QThread):
    """Thread running the asyncio chat client."""
    
    line_received = pyqtSignal(str)
    connected = pyqtSignal()
    disconnected = pyqtSignal()
    
    def __init__(self, config: ClientConfig):
        super().__init__()
        self.config = config
        self.client: Optional[ChatClient] = None
        self.loop: Optional[asyncio.AbstractEventLoop] = None
        self.loop_ready = threading.Event()
    
    def run(self):
        """Run network loop."""
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)
        self.client = ChatClient(self.config.host, self.config.port)
        self.loop_ready.set()
        try:
            self.loop.run_until_complete(self._connect_and_listen())
        finally:
            self.loop.close()
    
    async def _connect_and_listen(self):
        """Connect to server and forward every received line."""
        try:
            if not await self.client.connect(self.config.connect_attempts, self.config.connect_delay):
                return
            self.connected.emit()
            async for line in self.client.lines():
                self.line_received.emit(line)
        finally:
            await self.client.close()
            self.disconnected.emit()
    
    def send_line(self, text: str):
        """Send a line from the GUI thread."""
        if not self.loop_ready.wait(timeout=5.0):
            logger.warning("Event loop not ready, line not sent")
            return
        if self.loop.is_closed():
            logger.warning("Not connected, line not sent")
            return
        asyncio.run_coroutine_threadsafe(self.client.send_line(text), self.loop)
    
    def stop(self):
        """Stop network thread by closing the connection."""
        if self.loop is not None and not self.loop.is_closed() and self.client is not None:
            asyncio.run_coroutine_threadsafe(self.client.close(), self.loop)


# ============================================================================
# MAIN WINDOW
# ============================================================================

class ClientMainWindow(QMainWindow):
    """Main application window."""
    
    def __init__(self, config: ClientConfig):
        super().__init__()
        self.config = config
        self.network_thread: Optional[NetworkThread] = None
        self.setup_ui()
    
    def setup_ui(self):
        self.setWindowTitle(f"Line Chat - {self.config.host}:{self.config.port}")
        self.resize(640, 480)
        self.chat_widget = ChatWidget()
        self.setCentralWidget(self.chat_widget)
        
        quit_shortcut = QShortcut(QKeySequence("Esc"), self)
        quit_shortcut.activated.connect(self.close)
    
    def connect_to_server(self):
        """Start the network thread."""
        self.chat_widget.add_line(f"Connecting to {self.config.host}:{self.config.port}...")
        self.network_thread = NetworkThread(self.config)
        self.network_thread.line_received.connect(self.chat_widget.add_line)
        self.network_thread.connected.connect(self.on_connected)
        self.network_thread.disconnected.connect(self.on_disconnected)
        self.chat_widget.line_submitted.connect(self.network_thread.send_line)
        self.network_thread.start()
    
    def on_connected(self):
        self.setWindowTitle(f"Line Chat - connected to {self.config.host}:{self.config.port}")
    
    def on_disconnected(self):
        self.setWindowTitle("Line Chat - disconnected")
        self.chat_widget.add_line("Cannot read from connection")
    
    def closeEvent(self, event):
        """Close the connection before the window goes away."""
        if self.network_thread is not None:
            self.network_thread.stop()
            self.network_thread.wait(2000)
        super().closeEvent(event)


def run_gui_client(server: str) -> int:
    """Run the GUI client."""
    app = QApplication(sys.argv)
    window = ClientMainWindow(ClientConfig(server))
    window.show()
    window.connect_to_server()
    return app.exec()
