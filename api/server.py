"""
GearServer class for CLI control of the FastAPI application.
"""
import logging
import os
from typing import Optional

import uvicorn

from settings import PORT, LOG_LEVEL, BIND_ADDRESS
from utils.debug_console import setup_debug_logger
from .app import app

logger = logging.getLogger(__name__)

DEBUG_LOG_FILE = "gear_debug.log"


class GearServer:
    """Server wrapper for CLI control"""

    def __init__(self, debug: bool = False, bind_address: Optional[str] = None, port: Optional[int] = None):
        self.server = None
        self.config = None
        self.debug = debug
        self.debug_console_logger = None
        self.bind_address = bind_address or BIND_ADDRESS
        self.port = port or PORT

        if debug:
            self._setup_debug_logging()

    def _setup_debug_logging(self):
        """Route all log output to the console and an appended debug log file"""
        root_logger = logging.getLogger()
        root_logger.setLevel(logging.DEBUG)

        # Clear existing handlers to avoid duplicates
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        log_file = os.path.abspath(DEBUG_LOG_FILE)
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)

        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        root_logger.addHandler(file_handler)
        root_logger.addHandler(console_handler)

        # Rich console output from the CLI is captured to the same file
        self.debug_console_logger = setup_debug_logger(log_file)

        logger.info(f"Debug logging enabled - appending to {log_file}")

    def run(self):
        """Run the server (blocking)"""
        logger.info(f"Starting D&D Gear Generator on http://{self.bind_address}:{self.port}")
        logger.info("Available endpoints: /api/gear, /api/jewelry, /api/gear/describe")
        self.config = uvicorn.Config(
            app,
            host=self.bind_address,
            port=self.port,
            log_level="debug" if self.debug else LOG_LEVEL,
            access_log=False
        )
        self.server = uvicorn.Server(self.config)
        self.server.run()

    def stop(self):
        """Stop the server"""
        if self.server:
            self.server.should_exit = True
