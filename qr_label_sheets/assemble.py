"""
Document assembly: rows of tiles, spacers and page breaks.
"""

# Standard Library
import dataclasses
import pathlib

# local repo modules
import qr_label_sheets as qls
import qr_label_sheets.config
import qr_label_sheets.layout


LabelImage = qls.config.LabelImage
PageGeometry = qls.config.PageGeometry


@dataclasses.dataclass
class TileElement:
	image: LabelImage
	data: bytes = dataclasses.field(repr=False)
	width: float
	height: float


@dataclasses.dataclass
class PlaceholderElement:
	width: float
	height: float


@dataclasses.dataclass
class SpacerElement:
	width: float
	height: float


@dataclasses.dataclass
class RowElement:
	children: list[TileElement | PlaceholderElement | SpacerElement]

	@property
	def height(self) -> float:
		return max((child.height for child in self.children), default=0.0)


@dataclasses.dataclass
class PageBreakElement:
	pass


@dataclasses.dataclass
class DocumentContent:
	elements: list[RowElement | SpacerElement | PageBreakElement]
	page_count: int

	def _tiles(self) -> list[TileElement | PlaceholderElement]:
		tiles = []
		for element in self.elements:
			if not isinstance(element, RowElement):
				continue
			for child in element.children:
				if isinstance(child, (TileElement, PlaceholderElement)):
					tiles.append(child)
		return tiles

	@property
	def tile_count(self) -> int:
		return sum(1 for tile in self._tiles() if isinstance(tile, TileElement))

	@property
	def placeholder_count(self) -> int:
		return sum(1 for tile in self._tiles() if isinstance(tile, PlaceholderElement))

	@property
	def image_paths(self) -> list[pathlib.Path]:
		return [tile.image.path for tile in self._tiles() if isinstance(tile, TileElement)]


#============================================
def read_tile_data(image: LabelImage) -> bytes:
	"""
	Read the written file of a label image.

	Args:
		image: LabelImage with a path.

	Returns:
		File bytes.
	"""
	if image.path is None:
		raise FileNotFoundError(f"label {image.text} was never written to disk")
	return pathlib.Path(image.path).read_bytes()


#============================================
def build_row(
	slots: list[LabelImage | None],
	geometry: PageGeometry,
) -> RowElement:
	"""
	Build one row of tiles with horizontal spacers.

	Args:
		slots: Row slots, None for a placeholder.
		geometry: Page geometry.

	Returns:
		RowElement.
	"""
	children: list[TileElement | PlaceholderElement | SpacerElement] = []
	edge = geometry.horizontal_edge
	if edge > 0.0:
		children.append(SpacerElement(width=edge, height=geometry.tile_height))
	for col, slot in enumerate(slots):
		if col > 0:
			children.append(SpacerElement(width=geometry.horizontal_spacing, height=geometry.tile_height))
		if slot is None:
			children.append(PlaceholderElement(width=geometry.tile_width, height=geometry.tile_height))
			continue
		children.append(
			TileElement(
				image=slot,
				data=read_tile_data(slot),
				width=geometry.tile_width,
				height=geometry.tile_height,
			)
		)
	if edge > 0.0:
		children.append(SpacerElement(width=edge, height=geometry.tile_height))
	return RowElement(children=children)


#============================================
def assemble_document(images: list[LabelImage], geometry: PageGeometry) -> DocumentContent:
	"""
	Assemble label images into paginated document content.

	Every tile file is read here, so an unreadable image fails the run before
	any output is written.

	Args:
		images: Written label images in output order.
		geometry: Page geometry.

	Returns:
		DocumentContent.
	"""
	pages = qls.layout.paginate(images, geometry)
	usable_width = geometry.usable_width
	elements: list[RowElement | SpacerElement | PageBreakElement] = []
	for page in pages:
		if page.index > 0:
			elements.append(PageBreakElement())
		edge = geometry.vertical_edge
		if edge > 0.0:
			elements.append(SpacerElement(width=usable_width, height=edge))
		for row in range(geometry.rows):
			if row > 0:
				elements.append(SpacerElement(width=usable_width, height=geometry.vertical_spacing))
			start = row * geometry.columns
			elements.append(build_row(page.slots[start:start + geometry.columns], geometry))
		if edge > 0.0:
			elements.append(SpacerElement(width=usable_width, height=edge))
	return DocumentContent(elements=elements, page_count=len(pages))
