import logging
import os


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
