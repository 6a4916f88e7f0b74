"""
Input correction and label text generation.
"""

# Standard Library
import re

# local repo modules
import qr_label_sheets as qls
import qr_label_sheets.config


DEFAULT_CODE = qls.config.DEFAULT_CODE
DEFAULT_START = qls.config.DEFAULT_START
DEFAULT_END = qls.config.DEFAULT_END

LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


#============================================
def parse_code(raw: str | None) -> str:
	"""
	Resolve the label code prefix.

	Args:
		raw: User input, possibly empty.

	Returns:
		Code prefix, DEFAULT_CODE when empty.
	"""
	if raw is None:
		return DEFAULT_CODE
	code = raw.strip()
	if not code:
		return DEFAULT_CODE
	return code


#============================================
def parse_number(raw: str | None, default_value: int) -> int:
	"""
	Parse the leading integer of a user entry.

	Args:
		raw: User input like "12", " 7 ", or "12abc".
		default_value: Fallback when no integer is present.

	Returns:
		Parsed integer or the default.
	"""
	if raw is None:
		return default_value
	match = LEADING_INTEGER.match(raw)
	if match is None:
		return default_value
	return int(match.group(1))


#============================================
def normalize_range(start: int, end: int) -> tuple[int, int]:
	"""
	Order the range bounds.

	Args:
		start: First number.
		end: Last number.

	Returns:
		Tuple of (low, high).
	"""
	if end < start:
		return (end, start)
	return (start, end)


#============================================
def resolve_inputs(
	raw_code: str | None,
	raw_start: str | None,
	raw_end: str | None,
) -> tuple[str, int, int]:
	"""
	Apply defaults and range ordering to raw user answers.

	Args:
		raw_code: Code answer.
		raw_start: Start number answer.
		raw_end: End number answer.

	Returns:
		Tuple of (code, start, end) with start <= end.
	"""
	code = parse_code(raw_code)
	start = parse_number(raw_start, DEFAULT_START)
	end = parse_number(raw_end, DEFAULT_END)
	start, end = normalize_range(start, end)
	return (code, start, end)


#============================================
def format_label(code: str, number: int) -> str:
	return f"{code}-{number}"


#============================================
def build_label_texts(code: str, start: int, end: int) -> list[str]:
	"""
	Build label texts for an inclusive numeric range.

	Args:
		code: Code prefix.
		start: First number.
		end: Last number.

	Returns:
		Labels in ascending numeric order.
	"""
	start, end = normalize_range(start, end)
	return [format_label(code, number) for number in range(start, end + 1)]
