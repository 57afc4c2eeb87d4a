# src/linemarkers/config.py
import re

# Name of the synthetic anchor record every tree starts with
ROOT_NAME = "-"

# '# <linenum> "<filename>" [flag] [flag] [flag]'
LINEMARKER_PATTERN = re.compile(r'^#\s+(\d+)\s+"([^"]*)"\s*([0-4]?)\s*([0-4]?)\s*([0-4]?)$')

FLAG_ENTER_INCLUDE = 1
FLAG_RETURN_FROM_INCLUDE = 2

# Synthetic content lines written into retained file content
INCLUDE_LINE_TEMPLATE = '#include "{name}"'
LINE_JUMP_TEMPLATE = "#line {linenum}"

FILENAME_MODES = ("none", "head", "line")

REPORT_INDENT = "| "

DEFAULT_IGNORE_FILE = ".linemarkersignore"
