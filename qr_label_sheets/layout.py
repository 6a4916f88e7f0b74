"""
Grid geometry and pagination for label sheets.
"""

# Standard Library
import dataclasses

# local repo modules
import qr_label_sheets as qls
import qr_label_sheets.config


LabelImage = qls.config.LabelImage
LayoutMode = qls.config.LayoutMode
Margins = qls.config.Margins
PageGeometry = qls.config.PageGeometry
SheetConfig = qls.config.SheetConfig

GEOMETRY_TOLERANCE = qls.config.GEOMETRY_TOLERANCE


class LayoutError(ValueError):
	"""
	Raised when a sheet configuration cannot hold its grid.
	"""


@dataclasses.dataclass
class Page:
	index: int
	slots: list[LabelImage | None]

	@property
	def real_count(self) -> int:
		return sum(1 for slot in self.slots if slot is not None)

	@property
	def placeholder_count(self) -> int:
		return sum(1 for slot in self.slots if slot is None)


#============================================
def compute_fit_scale(
	width: float,
	height: float,
	max_width: float,
	max_height: float,
) -> float:
	"""
	Compute an aspect-preserving scale that fits a box without upscaling.

	Args:
		width: Original width.
		height: Original height.
		max_width: Available width.
		max_height: Available height.

	Returns:
		Scale factor in (0.0, 1.0].
	"""
	return min(max_width / width, max_height / height, 1.0)


#============================================
def compute_axis_spacing(
	usable: float,
	count: int,
	tile: float,
	mode: LayoutMode,
) -> tuple[float, float]:
	"""
	Solve the gap and edge padding along one axis.

	Args:
		usable: Usable length of the axis.
		count: Number of tiles along the axis.
		tile: Tile length along the axis.
		mode: Packing policy.

	Returns:
		Tuple of (spacing, edge).
	"""
	leftover = usable - count * tile
	if leftover < -1e-9:
		raise LayoutError(
			f"{count} tiles of {tile:.2f}pt need {count * tile:.2f}pt, "
			f"usable space is {usable:.2f}pt"
		)
	leftover = max(0.0, leftover)
	if mode is LayoutMode.EVEN:
		spacing = leftover / (count + 1)
		return (spacing, spacing)
	# a lone tile has no gap to absorb the leftover, so it is centered
	if count == 1:
		return (0.0, leftover / 2.0)
	return (leftover / (count - 1), 0.0)


#============================================
def compute_geometry(
	page_size: tuple[float, float],
	margins: Margins,
	columns: int,
	rows: int,
	tile_size: tuple[float, float],
	mode: LayoutMode,
	min_gap: float = 0.0,
) -> PageGeometry:
	"""
	Compute tile size and spacing for a page grid.

	BETWEEN mode first shrinks the tile so that `columns` tiles plus
	`min_gap` gaps fit the usable width (rows likewise). EVEN mode places
	tiles at their given size.

	Args:
		page_size: Tuple of (page_width, page_height) in points.
		margins: Page margins in points.
		columns: Tiles per row.
		rows: Rows per page.
		tile_size: Tuple of (tile_width, tile_height) in points.
		mode: Packing policy.
		min_gap: Smallest gap between tiles for BETWEEN mode.

	Returns:
		PageGeometry.
	"""
	if columns < 1 or rows < 1:
		raise LayoutError(f"grid must be at least 1x1, got {columns}x{rows}")
	page_width, page_height = page_size
	usable_width = page_width - margins.left - margins.right
	usable_height = page_height - margins.top - margins.bottom
	if usable_width <= 0.0 or usable_height <= 0.0:
		raise LayoutError(
			f"margins leave no usable area: {usable_width:.2f}x{usable_height:.2f}pt"
		)

	tile_width, tile_height = tile_size
	scale = 1.0
	if mode is LayoutMode.BETWEEN:
		max_width_per_column = (usable_width - (columns - 1) * min_gap) / columns
		max_height_per_row = (usable_height - (rows - 1) * min_gap) / rows
		if max_width_per_column <= 0.0 or max_height_per_row <= 0.0:
			raise LayoutError(f"minimum gap {min_gap:.2f}pt leaves no room for tiles")
		scale = compute_fit_scale(tile_width, tile_height, max_width_per_column, max_height_per_row)
		tile_width = tile_width * scale
		tile_height = tile_height * scale

	horizontal_spacing, horizontal_edge = compute_axis_spacing(usable_width, columns, tile_width, mode)
	vertical_spacing, vertical_edge = compute_axis_spacing(usable_height, rows, tile_height, mode)

	geometry = PageGeometry(
		page_width=page_width,
		page_height=page_height,
		margins=margins,
		columns=columns,
		rows=rows,
		tile_width=tile_width,
		tile_height=tile_height,
		horizontal_spacing=horizontal_spacing,
		vertical_spacing=vertical_spacing,
		horizontal_edge=horizontal_edge,
		vertical_edge=vertical_edge,
		mode=mode,
		scale=scale,
	)
	return geometry


#============================================
def compute_sheet_geometry(
	config: SheetConfig,
	pixel_width: int,
	pixel_height: int,
) -> PageGeometry:
	"""
	Compute page geometry for tiles rendered at a given pixel size.

	Args:
		config: Sheet configuration.
		pixel_width: Tile raster width.
		pixel_height: Tile raster height.

	Returns:
		PageGeometry.
	"""
	tile_width = qls.config.pixels_to_points(pixel_width, config.pixels_per_inch)
	tile_height = qls.config.pixels_to_points(pixel_height, config.pixels_per_inch)
	return compute_geometry(
		(config.page_width, config.page_height),
		config.margins,
		config.columns,
		config.rows,
		(tile_width, tile_height),
		config.mode,
		config.min_gap,
	)


#============================================
def compute_page_count(total_items: int, items_per_page: int) -> int:
	"""
	Count pages needed for a number of items.

	Args:
		total_items: Number of items.
		items_per_page: Slots per page.

	Returns:
		Page count, 0 for no items.
	"""
	if items_per_page < 1:
		raise LayoutError(f"items per page must be positive, got {items_per_page}")
	if total_items <= 0:
		return 0
	return (total_items + items_per_page - 1) // items_per_page


#============================================
def compute_page_range(page: int, items_per_page: int, total_items: int) -> tuple[int, int]:
	"""
	Compute the half-open item index range of a page.

	Args:
		page: Zero-based page index.
		items_per_page: Slots per page.
		total_items: Number of items.

	Returns:
		Tuple of (start, stop).
	"""
	start = page * items_per_page
	stop = min(start + items_per_page, total_items)
	return (start, stop)


#============================================
def paginate(images: list[LabelImage], geometry: PageGeometry) -> list[Page]:
	"""
	Slice images into pages, padding the last page with placeholders.

	Args:
		images: Label images in output order.
		geometry: Page geometry.

	Returns:
		List of pages.
	"""
	per_page = geometry.tiles_per_page
	page_count = compute_page_count(len(images), per_page)
	pages: list[Page] = []
	for page_index in range(page_count):
		start, stop = compute_page_range(page_index, per_page, len(images))
		slots: list[LabelImage | None] = list(images[start:stop])
		slots.extend([None] * (per_page - len(slots)))
		pages.append(Page(index=page_index, slots=slots))
	return pages


#============================================
def compute_cell_origin(geometry: PageGeometry, row: int, col: int) -> tuple[float, float]:
	"""
	Compute the bottom-left corner of a grid slot in PDF coordinates.

	Args:
		geometry: Page geometry.
		row: Row index from the top.
		col: Column index from the left.

	Returns:
		Tuple of (x, y) in points.
	"""
	cell_x = geometry.margins.left + geometry.horizontal_edge + col * (
		geometry.tile_width + geometry.horizontal_spacing
	)
	cell_y = geometry.page_height - geometry.margins.top - geometry.vertical_edge - (
		geometry.tile_height
	) - row * (geometry.tile_height + geometry.vertical_spacing)
	return (cell_x, cell_y)


#============================================
def check_geometry(geometry: PageGeometry) -> bool:
	"""
	Check that tiles plus spacing fill the usable area.

	Args:
		geometry: Page geometry.

	Returns:
		True when both axes match within GEOMETRY_TOLERANCE.
	"""
	filled_width = geometry.columns * geometry.tile_width + geometry.total_horizontal_spacing
	filled_height = geometry.rows * geometry.tile_height + geometry.total_vertical_spacing
	width_ok = abs(filled_width - geometry.usable_width) <= GEOMETRY_TOLERANCE
	height_ok = abs(filled_height - geometry.usable_height) <= GEOMETRY_TOLERANCE
	return width_ok and height_ok
