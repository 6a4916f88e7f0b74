"""
PDF output for assembled label sheets.
"""

# Standard Library
import io
import json
import pathlib
import typing

# PIP3 modules
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import qr_label_sheets as qls
import qr_label_sheets.assemble
import qr_label_sheets.config


AssemblyResult = qls.config.AssemblyResult
PageGeometry = qls.config.PageGeometry
DocumentContent = qls.assemble.DocumentContent
PageBreakElement = qls.assemble.PageBreakElement
PlaceholderElement = qls.assemble.PlaceholderElement
SpacerElement = qls.assemble.SpacerElement
TileElement = qls.assemble.TileElement

POINTS_PER_INCH = qls.config.POINTS_PER_INCH
OUTLINE_GRAY = qls.config.OUTLINE_GRAY
OUTLINE_WIDTH = qls.config.OUTLINE_WIDTH


#============================================
def draw_tile_outline(
	pdf: reportlab.pdfgen.canvas.Canvas,
	x: float,
	y: float,
	width: float,
	height: float,
) -> None:
	"""
	Draw a light cut guide around a tile slot.

	Args:
		pdf: ReportLab canvas.
		x: Left edge.
		y: Bottom edge.
		width: Slot width.
		height: Slot height.
	"""
	pdf.setLineWidth(OUTLINE_WIDTH)
	pdf.setStrokeColorRGB(OUTLINE_GRAY, OUTLINE_GRAY, OUTLINE_GRAY)
	pdf.rect(x, y, width, height, stroke=1, fill=0)


#============================================
def iter_slot_positions(
	content: DocumentContent,
	geometry: PageGeometry,
) -> typing.Iterator[tuple[int, float, float, TileElement | PlaceholderElement]]:
	"""
	Walk assembled content and place every tile and placeholder.

	Elements flow from the top-left of the usable area: spacers between rows
	move the cursor down, row children advance it to the right, page breaks
	start a new page.

	Args:
		content: Assembled document content.
		geometry: Page geometry.

	Yields:
		Tuples of (page_index, x, y, element) with (x, y) the bottom-left
		corner in PDF coordinates.
	"""
	page_top = geometry.page_height - geometry.margins.top
	page_index = 0
	cursor_y = page_top
	for element in content.elements:
		if isinstance(element, PageBreakElement):
			page_index += 1
			cursor_y = page_top
			continue
		if isinstance(element, SpacerElement):
			cursor_y -= element.height
			continue
		cursor_x = geometry.margins.left
		for child in element.children:
			if isinstance(child, (TileElement, PlaceholderElement)):
				yield (page_index, cursor_x, cursor_y - child.height, child)
			cursor_x += child.width
		cursor_y -= element.height


#============================================
def draw_slot(
	pdf: reportlab.pdfgen.canvas.Canvas,
	element: TileElement | PlaceholderElement,
	x: float,
	y: float,
	draw_outlines: bool,
) -> None:
	"""
	Draw one tile or placeholder slot.

	Args:
		pdf: ReportLab canvas.
		element: Tile or placeholder.
		x: Left edge.
		y: Bottom edge.
		draw_outlines: Draw a cut guide around the slot.
	"""
	if isinstance(element, TileElement):
		image_reader = reportlab.lib.utils.ImageReader(io.BytesIO(element.data))
		pdf.drawImage(
			image_reader,
			x,
			y,
			width=element.width,
			height=element.height,
			mask=None,
			preserveAspectRatio=False,
			anchor="sw",
		)
	if draw_outlines:
		draw_tile_outline(pdf, x, y, element.width, element.height)


#============================================
def render_document_pdf(
	content: DocumentContent,
	geometry: PageGeometry,
	output_path: pathlib.Path,
	draw_outlines: bool = False,
) -> AssemblyResult:
	"""
	Write assembled content to a PDF.

	Args:
		content: Assembled document content.
		geometry: Page geometry.
		output_path: Output PDF path.
		draw_outlines: Draw cut guides around every slot.

	Returns:
		AssemblyResult.
	"""
	pdf = reportlab.pdfgen.canvas.Canvas(
		str(output_path),
		pagesize=(geometry.page_width, geometry.page_height),
	)
	pdf.setTitle("QR labels")
	current_page = 0
	for page_index, x, y, element in iter_slot_positions(content, geometry):
		while current_page < page_index:
			pdf.showPage()
			current_page += 1
		draw_slot(pdf, element, x, y, draw_outlines)
	pdf.save()

	return AssemblyResult(
		total_labels=content.tile_count,
		pages=content.page_count,
		labels_per_page=geometry.tiles_per_page,
		placeholders=content.placeholder_count,
		output_path=pathlib.Path(output_path),
	)


#============================================
def print_layout_report(geometry: PageGeometry, result: AssemblyResult) -> None:
	"""
	Print the page layout summary.

	Args:
		geometry: Page geometry.
		result: Assembly result.
	"""
	page_width_in = geometry.page_width / POINTS_PER_INCH
	page_height_in = geometry.page_height / POINTS_PER_INCH
	margins = geometry.margins
	print("=== DOCUMENT LAYOUT ===")
	print(f"Page size: {page_width_in:.2f}in x {page_height_in:.2f}in")
	print(
		"Margins: top={:.2f}in right={:.2f}in bottom={:.2f}in left={:.2f}in".format(
			margins.top / POINTS_PER_INCH,
			margins.right / POINTS_PER_INCH,
			margins.bottom / POINTS_PER_INCH,
			margins.left / POINTS_PER_INCH,
		)
	)
	print(f"Packing: {geometry.mode.value}")
	print(f"Grid: {geometry.columns} columns x {geometry.rows} rows = {geometry.tiles_per_page} per page")
	print(f"Tile size: {geometry.tile_width:.2f}pt x {geometry.tile_height:.2f}pt (scale {geometry.scale:.3f})")
	print(f"Horizontal spacing: {geometry.horizontal_spacing:.2f}pt (edge {geometry.horizontal_edge:.2f}pt)")
	print(f"Vertical spacing: {geometry.vertical_spacing:.2f}pt (edge {geometry.vertical_edge:.2f}pt)")
	print(f"Total pages: {result.pages}")
	print(f"Placeholders: {result.placeholders}")


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	content: DocumentContent,
	geometry: PageGeometry,
	result: AssemblyResult,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		content: Assembled document content.
		geometry: Page geometry.
		result: Assembly result.
	"""
	data = {
		"document": str(result.output_path),
		"images": [str(path) for path in content.image_paths],
		"total_labels": result.total_labels,
		"labels_per_page": result.labels_per_page,
		"placeholders": result.placeholders,
		"pages": result.pages,
		"layout": {
			"mode": geometry.mode.value,
			"page_width": geometry.page_width,
			"page_height": geometry.page_height,
			"margins": {
				"top": geometry.margins.top,
				"right": geometry.margins.right,
				"bottom": geometry.margins.bottom,
				"left": geometry.margins.left,
			},
			"columns": geometry.columns,
			"rows": geometry.rows,
			"tile_width": geometry.tile_width,
			"tile_height": geometry.tile_height,
			"horizontal_spacing": geometry.horizontal_spacing,
			"vertical_spacing": geometry.vertical_spacing,
			"horizontal_edge": geometry.horizontal_edge,
			"vertical_edge": geometry.vertical_edge,
			"scale": geometry.scale,
		},
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
