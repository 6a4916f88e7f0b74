import pathlib

import PIL.Image
import pytest

import qr_label_sheets.assemble
import qr_label_sheets.config
import qr_label_sheets.layout


LayoutMode = qr_label_sheets.config.LayoutMode
LabelImage = qr_label_sheets.config.LabelImage
Margins = qr_label_sheets.config.Margins
LETTER = (qr_label_sheets.config.LETTER_WIDTH, qr_label_sheets.config.LETTER_HEIGHT)

PageBreakElement = qr_label_sheets.assemble.PageBreakElement
PlaceholderElement = qr_label_sheets.assemble.PlaceholderElement
RowElement = qr_label_sheets.assemble.RowElement
SpacerElement = qr_label_sheets.assemble.SpacerElement
TileElement = qr_label_sheets.assemble.TileElement


#============================================
def write_images(tmp_path: pathlib.Path, code: str, count: int) -> list[LabelImage]:
	"""
	Write small PNG tiles and return label images pointing at them.
	"""
	images = []
	for number in range(1, count + 1):
		text = f"{code}-{number}"
		path = tmp_path / f"{text}.png"
		PIL.Image.new("RGB", (20, 25), (255, 255, 255)).save(path, format="PNG")
		data = path.read_bytes()
		images.append(LabelImage(text=text, pixel_width=20, pixel_height=25, data=data, path=path))
	return images


#============================================
def build_geometry(mode: LayoutMode, columns: int = 4, rows: int = 2) -> qr_label_sheets.config.PageGeometry:
	margins = Margins(top=50.4, right=50.4, bottom=50.4, left=50.4)
	return qr_label_sheets.layout.compute_geometry(
		LETTER, margins, columns, rows, (100.0, 125.0), mode, min_gap=9.0,
	)


#============================================
def rows_of(content: qr_label_sheets.assemble.DocumentContent) -> list[RowElement]:
	return [element for element in content.elements if isinstance(element, RowElement)]


#============================================
def test_nine_labels_two_pages(tmp_path: pathlib.Path) -> None:
	"""
	AB-1..AB-9 at 8 per page: one full page, then AB-9 plus 7 placeholders.
	"""
	images = write_images(tmp_path, "AB", 9)
	geometry = build_geometry(LayoutMode.BETWEEN)
	content = qr_label_sheets.assemble.assemble_document(images, geometry)
	assert content.page_count == 2
	assert content.tile_count == 9
	assert content.placeholder_count == 7

	breaks = [index for index, element in enumerate(content.elements) if isinstance(element, PageBreakElement)]
	assert len(breaks) == 1
	assert not isinstance(content.elements[-1], PageBreakElement)

	second_page_rows = [element for element in content.elements[breaks[0]:] if isinstance(element, RowElement)]
	tiles = [child for row in second_page_rows for child in row.children if not isinstance(child, SpacerElement)]
	assert isinstance(tiles[0], TileElement)
	assert tiles[0].image.text == "AB-9"
	assert all(isinstance(tile, PlaceholderElement) for tile in tiles[1:])
	assert len(tiles) == 8


#============================================
def test_placeholders_match_tile_size(tmp_path: pathlib.Path) -> None:
	"""
	Placeholders declare the same size as real tiles.
	"""
	images = write_images(tmp_path, "HP", 3)
	geometry = build_geometry(LayoutMode.EVEN)
	content = qr_label_sheets.assemble.assemble_document(images, geometry)
	for row in rows_of(content):
		for child in row.children:
			if isinstance(child, (TileElement, PlaceholderElement)):
				assert child.width == geometry.tile_width
				assert child.height == geometry.tile_height


#============================================
def test_between_rows_have_inner_spacers_only(tmp_path: pathlib.Path) -> None:
	"""
	BETWEEN rows alternate tile and spacer with no edge spacers.
	"""
	images = write_images(tmp_path, "HP", 8)
	geometry = build_geometry(LayoutMode.BETWEEN)
	content = qr_label_sheets.assemble.assemble_document(images, geometry)
	for row in rows_of(content):
		assert not isinstance(row.children[0], SpacerElement)
		assert not isinstance(row.children[-1], SpacerElement)
		spacers = [child for child in row.children if isinstance(child, SpacerElement)]
		assert len(spacers) == geometry.columns - 1
		for spacer in spacers:
			assert spacer.width == geometry.horizontal_spacing
		row_width = sum(child.width for child in row.children)
		assert row_width == pytest.approx(geometry.usable_width, abs=1.0)
	assert not isinstance(content.elements[0], SpacerElement)


#============================================
def test_even_rows_have_edge_spacers(tmp_path: pathlib.Path) -> None:
	"""
	EVEN rows start and end with a spacer and pages are padded vertically.
	"""
	images = write_images(tmp_path, "HP", 5)
	geometry = build_geometry(LayoutMode.EVEN, columns=4, rows=4)
	content = qr_label_sheets.assemble.assemble_document(images, geometry)
	for row in rows_of(content):
		assert isinstance(row.children[0], SpacerElement)
		assert isinstance(row.children[-1], SpacerElement)
		spacers = [child for child in row.children if isinstance(child, SpacerElement)]
		assert len(spacers) == geometry.columns + 1
		row_width = sum(child.width for child in row.children)
		assert row_width == pytest.approx(geometry.usable_width, abs=1.0)

	assert isinstance(content.elements[0], SpacerElement)
	assert content.elements[0].height == geometry.vertical_edge
	page_height = sum(
		element.height for element in content.elements if isinstance(element, (RowElement, SpacerElement))
	)
	assert page_height == pytest.approx(geometry.usable_height, abs=1.0)


#============================================
def test_document_paths_exist(tmp_path: pathlib.Path) -> None:
	"""
	Every image referenced by the document is an existing file.
	"""
	images = write_images(tmp_path, "HP", 11)
	geometry = build_geometry(LayoutMode.EVEN)
	content = qr_label_sheets.assemble.assemble_document(images, geometry)
	assert content.image_paths == [image.path for image in images]
	for path in content.image_paths:
		assert path.is_file()


#============================================
def test_empty_input_has_no_pages() -> None:
	"""
	No images give an empty document body.
	"""
	geometry = build_geometry(LayoutMode.EVEN)
	content = qr_label_sheets.assemble.assemble_document([], geometry)
	assert content.page_count == 0
	assert content.elements == []


#============================================
def test_unreadable_image_is_fatal(tmp_path: pathlib.Path) -> None:
	"""
	A missing tile file aborts assembly.
	"""
	images = write_images(tmp_path, "HP", 3)
	images[1].path.unlink()
	geometry = build_geometry(LayoutMode.EVEN)
	with pytest.raises(FileNotFoundError):
		qr_label_sheets.assemble.assemble_document(images, geometry)


#============================================
def test_unwritten_image_is_fatal() -> None:
	"""
	An image that was never written cannot be assembled.
	"""
	image = LabelImage(text="HP-1", pixel_width=20, pixel_height=25, data=b"")
	geometry = build_geometry(LayoutMode.EVEN)
	with pytest.raises(FileNotFoundError):
		qr_label_sheets.assemble.assemble_document([image], geometry)
