import math

import pytest

import qr_label_sheets.config
import qr_label_sheets.layout


LayoutMode = qr_label_sheets.config.LayoutMode
LabelImage = qr_label_sheets.config.LabelImage
Margins = qr_label_sheets.config.Margins
LETTER = (qr_label_sheets.config.LETTER_WIDTH, qr_label_sheets.config.LETTER_HEIGHT)


#============================================
def build_geometry(columns: int, rows: int) -> qr_label_sheets.config.PageGeometry:
	"""
	Build a small EVEN-mode geometry for pagination tests.
	"""
	margins = Margins(top=36.0, right=36.0, bottom=36.0, left=36.0)
	return qr_label_sheets.layout.compute_geometry(
		LETTER, margins, columns, rows, (100.0, 120.0), LayoutMode.EVEN,
	)


#============================================
def fake_images(code: str, count: int) -> list[LabelImage]:
	"""
	Build in-memory label images without files.
	"""
	return [
		LabelImage(text=f"{code}-{number}", pixel_width=200, pixel_height=250, data=b"")
		for number in range(1, count + 1)
	]


#============================================
def test_page_count_is_ceiling() -> None:
	"""
	pageCount == ceil(total / per_page) and the last page holds the remainder.
	"""
	for per_page, grid in ((8, (4, 2)), (16, (4, 4))):
		geometry = build_geometry(*grid)
		assert geometry.tiles_per_page == per_page
		for total in range(0, 51):
			page_count = qr_label_sheets.layout.compute_page_count(total, per_page)
			assert page_count == math.ceil(total / per_page)
			pages = qr_label_sheets.layout.paginate(fake_images("HP", total), geometry)
			assert len(pages) == page_count
			assert sum(page.real_count for page in pages) == total
			if page_count > 0:
				assert pages[-1].real_count == total - (page_count - 1) * per_page
				for page in pages:
					assert len(page.slots) == per_page


#============================================
def test_page_ranges_are_half_open() -> None:
	"""
	Page ranges cover [p*per, min((p+1)*per, total)).
	"""
	assert qr_label_sheets.layout.compute_page_range(0, 8, 9) == (0, 8)
	assert qr_label_sheets.layout.compute_page_range(1, 8, 9) == (8, 9)
	assert qr_label_sheets.layout.compute_page_range(2, 16, 40) == (32, 40)


#============================================
def test_nine_labels_on_eight_slot_pages() -> None:
	"""
	AB-1..AB-9 with 8 per page gives a full page and a page with AB-9.
	"""
	geometry = build_geometry(4, 2)
	pages = qr_label_sheets.layout.paginate(fake_images("AB", 9), geometry)
	assert len(pages) == 2
	assert pages[0].real_count == 8
	assert pages[0].placeholder_count == 0
	assert pages[1].real_count == 1
	assert pages[1].placeholder_count == 7
	assert pages[1].slots[0].text == "AB-9"
	assert [slot.text for slot in pages[0].slots] == [f"AB-{n}" for n in range(1, 9)]


#============================================
def test_no_items_no_pages() -> None:
	"""
	Zero items produce zero pages.
	"""
	geometry = build_geometry(4, 4)
	assert qr_label_sheets.layout.compute_page_count(0, 16) == 0
	assert qr_label_sheets.layout.paginate([], geometry) == []


#============================================
def test_invalid_page_size_raises() -> None:
	"""
	Non-positive items per page is a configuration error.
	"""
	with pytest.raises(qr_label_sheets.layout.LayoutError):
		qr_label_sheets.layout.compute_page_count(5, 0)
