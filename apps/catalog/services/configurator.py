"""
Variant configurator for product detail pages.

A product's variant rows are loaded once into an index; every user
interaction is then resolved against it into:

- the legal choices at each facet, given the choices already made,
- a corrected selection (stale choices are replaced, never reported),
- the image to display and the gallery to show it in.

Fastener products cascade diameter -> length/unit -> finish/type.
Fitting products cascade size label -> finish.

Nothing in here touches the database; the ORM side lives in
``variant_navigation``.
"""

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

STYLE_FASTENER = 'fastener'
STYLE_FITTING = 'fitting'

UNIT_MM = 'mm'
UNIT_INCH = 'inch'
DIAMETER_UNIT_MM = 'mm'
DIAMETER_UNIT_GAUGE = 'gauge'

STAGE_NO_DIAMETER = 'no_diameter'
STAGE_DIAMETER_ONLY = 'diameter_only'
STAGE_DIAMETER_AND_LENGTH = 'diameter_and_length'
STAGE_FULLY_SELECTED = 'fully_selected'

STAGE_NO_SIZE = 'no_size'
STAGE_SIZE_ONLY = 'size_only'
STAGE_SIZE_AND_FINISH = 'size_and_finish'

FOCUS_FINISH = 'finish'
FOCUS_TYPE = 'type'

LEADING_NUMBER = re.compile(r'^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))')


def _clean(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _pick(row: Mapping, *keys) -> str:
    """First non-empty value among ``keys`` (rows come camelCase or snake_case)."""
    for key in keys:
        value = _clean(row.get(key))
        if value:
            return value
    return ''


def numeric_sort_key(value: str) -> Tuple[int, float, str]:
    """
    Sort key for size values: by the leading number ("6mm" sorts as 6,
    "1/2" as 1), then values without one in string order.
    """
    match = LEADING_NUMBER.match(value or '')
    if match is None:
        return (1, 0.0, value)
    return (0, float(match.group(1)), value)


def _distinct(values: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for value in values:
        if value and value not in seen:
            seen.add(value)
            result.append(value)
    return result


# =============================================================================
# Variant records
# =============================================================================

@dataclass(frozen=True)
class FastenerVariant:
    """One fastener variant row: diameter x length x finish x type."""

    diameter: str = ''
    diameter_unit: str = DIAMETER_UNIT_MM
    length: str = ''
    unit: str = UNIT_MM
    finish: str = ''
    type: str = ''
    image: str = ''

    @classmethod
    def from_row(cls, row: Mapping) -> 'FastenerVariant':
        return cls(
            diameter=_pick(row, 'diameter'),
            diameter_unit=_pick(row, 'diameter_unit', 'diameterUnit') or DIAMETER_UNIT_MM,
            length=_pick(row, 'length'),
            unit=_pick(row, 'unit') or UNIT_MM,
            finish=_pick(row, 'finish'),
            type=_pick(row, 'type'),
            image=_pick(row, 'image'),
        )

    @property
    def lengths(self) -> Tuple[str, ...]:
        # Legacy rows store several lengths sharing one unit as "25, 32, 40"
        return tuple(part.strip() for part in self.length.split(',') if part.strip())

    def matches_length(self, length: str, legacy: bool = False) -> bool:
        if not length:
            return False
        if legacy:
            return self.length == length or (bool(self.length) and length in self.length)
        return length in self.lengths


@dataclass(frozen=True)
class FittingVariant:
    """One fitting/hardware variant row: an opaque size label x finish."""

    size_label: str = ''
    finish: str = ''
    type: str = ''
    image: str = ''
    # Rows written by older editors carry the label in `length` as well
    alias: str = ''

    @classmethod
    def from_row(cls, row: Mapping) -> 'FittingVariant':
        diameter = _pick(row, 'diameter')
        length = _pick(row, 'length')
        size_label = _pick(row, 'size_label', 'sizeLabel') or diameter or length
        alias = length if diameter and length and length != size_label else ''
        return cls(
            size_label=size_label,
            finish=_pick(row, 'finish'),
            type=_pick(row, 'type'),
            image=_pick(row, 'image'),
            alias=alias,
        )

    def matches_size(self, label: str) -> bool:
        return bool(label) and label in (self.size_label, self.alias)


Variant = Union[FastenerVariant, FittingVariant]


def build_variants(rows: Iterable[Mapping], style: str) -> List[Variant]:
    """
    Convert raw variant rows into typed records.

    The record type is chosen once for the whole product from ``style``;
    it is never guessed row by row.
    """
    record_class = FittingVariant if style == STYLE_FITTING else FastenerVariant
    return [record_class.from_row(row) for row in rows]


# =============================================================================
# Choice values
# =============================================================================

@dataclass(frozen=True)
class DiameterOption:
    value: str
    unit: str = DIAMETER_UNIT_MM

    @property
    def label(self) -> str:
        if self.unit == DIAMETER_UNIT_GAUGE:
            return f"#{self.value}"
        bare = self.value[:-2].strip() if self.value.lower().endswith('mm') else self.value
        return f"{bare}mm"

    def as_dict(self) -> Dict[str, str]:
        return {'value': self.value, 'unit': self.unit, 'label': self.label}


@dataclass(frozen=True)
class LengthOption:
    value: str
    unit: str = UNIT_MM

    @property
    def label(self) -> str:
        return f"{self.value} {self.unit}"

    def as_dict(self) -> Dict[str, str]:
        return {'value': self.value, 'unit': self.unit, 'label': self.label}


# =============================================================================
# Variant index
# =============================================================================

class VariantIndex:
    """
    Read-only projections over a fastener product's variant rows.

    Built once per product load. ``legacy_length_match`` switches the
    length membership test back to plain substring matching, which lets a
    selected "2" match a stored "25".
    """

    def __init__(self, variants: Iterable[FastenerVariant], legacy_length_match: bool = False):
        self.variants: Tuple[FastenerVariant, ...] = tuple(variants)
        self.legacy_length_match = legacy_length_match

    def unique_diameters(self) -> List[DiameterOption]:
        units: Dict[str, str] = {}
        for variant in self.variants:
            if variant.diameter and variant.diameter not in units:
                units[variant.diameter] = variant.diameter_unit
        ordered = sorted(units, key=numeric_sort_key)
        return [DiameterOption(value, units[value]) for value in ordered]

    def diameter_title(self, diameter: str) -> str:
        for variant in self.variants:
            if variant.diameter == diameter:
                if variant.diameter_unit == DIAMETER_UNIT_GAUGE:
                    return 'Select Gauge'
                break
        return 'Select Diameter'

    def lengths_for_diameter(self, diameter: str) -> List[LengthOption]:
        if not diameter:
            return []
        options: Dict[Tuple[str, str], LengthOption] = {}
        for variant in self.variants:
            if variant.diameter != diameter:
                continue
            for value in variant.lengths:
                key = (value, variant.unit)
                if key not in options:
                    options[key] = LengthOption(value, variant.unit)
        return sorted(options.values(), key=lambda option: numeric_sort_key(option.value))

    def matching(self, diameter: str, length: str, unit: str) -> List[FastenerVariant]:
        """Rows for an exact diameter + length + unit selection."""
        if not (diameter and length and unit):
            return []
        return [
            variant for variant in self.variants
            if variant.diameter == diameter
            and variant.unit == unit
            and variant.matches_length(length, self.legacy_length_match)
        ]

    def finishes_for(self, diameter: str, length: str, unit: str) -> List[str]:
        return _distinct(v.finish for v in self.matching(diameter, length, unit))

    def types_for(self, diameter: str, length: str, unit: str) -> List[str]:
        return _distinct(v.type for v in self.matching(diameter, length, unit))


class FittingIndex:
    """Projections over a fitting product's rows: size label -> finishes."""

    def __init__(self, variants: Iterable[FittingVariant]):
        self.variants: Tuple[FittingVariant, ...] = tuple(variants)

    def size_labels(self) -> List[str]:
        return _distinct(v.size_label for v in self.variants)

    def finishes_for_size(self, size_label: str) -> List[str]:
        if not size_label:
            return []
        return _distinct(v.finish for v in self.variants if v.matches_size(size_label))

    def variant_for(self, size_label: str, finish: str) -> Optional[FittingVariant]:
        for variant in self.variants:
            if variant.matches_size(size_label) and variant.finish == finish:
                return variant
        return None


# =============================================================================
# Selection state
# =============================================================================

@dataclass(frozen=True)
class FastenerSelection:
    """
    Current fastener selection as owned by the page.

    ``focus`` records whether the display image follows the finish or the
    type the user last picked.
    """
    diameter: str = ''
    length: str = ''
    unit: str = ''
    finish: str = ''
    type: str = ''
    focus: str = ''

    @property
    def stage(self) -> str:
        if not self.diameter:
            return STAGE_NO_DIAMETER
        if not self.length:
            return STAGE_DIAMETER_ONLY
        if not (self.finish or self.type):
            return STAGE_DIAMETER_AND_LENGTH
        return STAGE_FULLY_SELECTED

    def as_dict(self) -> Dict[str, str]:
        return {
            'diameter': self.diameter,
            'length': self.length,
            'unit': self.unit,
            'finish': self.finish,
            'type': self.type,
            'focus': self.focus,
            'stage': self.stage,
        }


@dataclass(frozen=True)
class FittingSelection:
    size_label: str = ''
    finish: str = ''

    @property
    def stage(self) -> str:
        if not self.size_label:
            return STAGE_NO_SIZE
        if not self.finish:
            return STAGE_SIZE_ONLY
        return STAGE_SIZE_AND_FINISH

    def as_dict(self) -> Dict[str, str]:
        return {'size_label': self.size_label, 'finish': self.finish, 'stage': self.stage}


# =============================================================================
# Resolutions
# =============================================================================

@dataclass
class FastenerResolution:
    selection: FastenerSelection
    diameters: List[DiameterOption]
    lengths: List[LengthOption]
    finishes: List[str]
    types: List[str]
    diameter_title: str
    image: str
    override_image: str = ''
    gallery: List[str] = field(default_factory=list)

    @property
    def has_size_variation(self) -> bool:
        return bool(self.lengths)

    def as_dict(self) -> Dict:
        return {
            'style': STYLE_FASTENER,
            'selection': self.selection.as_dict(),
            'diameter_title': self.diameter_title,
            'diameters': [option.as_dict() for option in self.diameters],
            'lengths': [option.as_dict() for option in self.lengths],
            'finishes': list(self.finishes),
            'types': list(self.types),
            'has_size_variation': self.has_size_variation,
            'image': self.image,
            'override_image': self.override_image or None,
            'gallery': list(self.gallery),
        }


@dataclass
class FittingResolution:
    selection: FittingSelection
    sizes: List[str]
    finishes: List[str]
    image: str
    override_image: str = ''
    gallery: List[str] = field(default_factory=list)

    @property
    def standard_finish_only(self) -> bool:
        """The selected size has no finish variation to choose from."""
        return bool(self.selection.size_label) and not self.finishes

    def as_dict(self) -> Dict:
        return {
            'style': STYLE_FITTING,
            'selection': self.selection.as_dict(),
            'sizes': list(self.sizes),
            'finishes': list(self.finishes),
            'standard_finish_only': self.standard_finish_only,
            'image': self.image,
            'override_image': self.override_image or None,
            'gallery': list(self.gallery),
        }


# =============================================================================
# Resolvers
# =============================================================================

class _GalleryMixin:
    """Primary image and override-prepended gallery shared by both resolvers."""

    gallery: Tuple[str, ...]
    placeholder: str

    def primary_image(self) -> str:
        return self.gallery[0] if self.gallery else self.placeholder

    def display_gallery(self, override: str) -> List[str]:
        images = list(self.gallery) or ([self.placeholder] if self.placeholder else [])
        if override:
            return [override] + images
        return images


class FastenerConfigurator(_GalleryMixin):
    """
    Diameter -> length/unit -> finish/type cascade for fastener products.

    Every ``select_*`` call returns a new selection in which each facet is
    a member of the choices available for the facets above it; stale
    choices are replaced by the first legal one (finish) or cleared
    (type), never reported as errors.
    """

    def __init__(
        self,
        index: VariantIndex,
        finish_images: Optional[Mapping[str, str]] = None,
        type_images: Optional[Mapping[str, str]] = None,
        gallery: Sequence[str] = (),
        placeholder: str = '',
    ):
        self.index = index
        self.finish_images = dict(finish_images or {})
        self.type_images = dict(type_images or {})
        self.gallery = tuple(image for image in gallery if image)
        self.placeholder = placeholder

    # -- transitions ----------------------------------------------------

    def load(self) -> FastenerSelection:
        """Initial selection: the lowest diameter, cascaded downwards."""
        diameters = self.index.unique_diameters()
        if not diameters:
            return FastenerSelection()
        return self.validate(FastenerSelection(diameter=diameters[0].value))

    def select_diameter(self, selection: FastenerSelection, diameter: str) -> FastenerSelection:
        return self.validate(replace(selection, diameter=_clean(diameter)))

    def select_length(self, selection: FastenerSelection, length: str, unit: str) -> FastenerSelection:
        return self.validate(replace(selection, length=_clean(length), unit=_clean(unit) or UNIT_MM))

    def select_finish(self, selection: FastenerSelection, finish: str) -> FastenerSelection:
        return self.validate(replace(selection, finish=_clean(finish), focus=FOCUS_FINISH))

    def select_type(self, selection: FastenerSelection, type_: str) -> FastenerSelection:
        return self.validate(replace(selection, type=_clean(type_), focus=FOCUS_TYPE))

    def validate(self, selection: FastenerSelection) -> FastenerSelection:
        """
        Re-check every facet top-down against the index.

        Valid selections come back unchanged, so applying the same
        transition twice is a no-op the second time.
        """
        diameter = selection.diameter
        if diameter and diameter not in {d.value for d in self.index.unique_diameters()}:
            logger.debug("Dropping unknown diameter %r", diameter)
            diameter = ''
        if not diameter:
            return FastenerSelection(focus=selection.focus)

        length, unit = selection.length, selection.unit
        lengths = self.index.lengths_for_diameter(diameter)
        if LengthOption(length, unit) not in lengths:
            if lengths:
                length, unit = lengths[0].value, lengths[0].unit
            else:
                length, unit = '', ''
            if selection.length:
                logger.debug(
                    "Length %r %r not offered for diameter %r, now %r %r",
                    selection.length, selection.unit, diameter, length, unit,
                )

        finish = selection.finish
        finishes = self.index.finishes_for(diameter, length, unit)
        if finish not in finishes:
            finish = finishes[0] if finishes else ''

        type_ = selection.type
        if type_ not in self.index.types_for(diameter, length, unit):
            type_ = ''

        return FastenerSelection(
            diameter=diameter,
            length=length,
            unit=unit,
            finish=finish,
            type=type_,
            focus=selection.focus,
        )

    # -- images ---------------------------------------------------------

    def finish_image(self, selection: FastenerSelection) -> Tuple[str, bool]:
        """
        Image for the selected finish and whether it overrides the gallery.

        Exact variant image, then the product's finish image map, then the
        primary gallery image.
        """
        finish = selection.finish
        for variant in self.index.matching(selection.diameter, selection.length, selection.unit):
            if variant.finish == finish and variant.image:
                return variant.image, True
        if self.finish_images.get(finish):
            return self.finish_images[finish], True
        return self.primary_image(), False

    def type_image(self, selection: FastenerSelection) -> Tuple[str, bool]:
        """
        Image for the selected type: a row of this type and diameter, any row
        of this type, the product's type image map, the primary image.
        """
        type_ = selection.type
        same_type = [v for v in self.index.variants if v.type == type_ and v.image]
        for variant in same_type:
            if variant.diameter == selection.diameter:
                return variant.image, True
        if same_type:
            return same_type[0].image, True
        if self.type_images.get(type_):
            return self.type_images[type_], True
        return self.primary_image(), False

    def display_image(self, selection: FastenerSelection) -> Tuple[str, bool]:
        if selection.focus == FOCUS_TYPE and selection.type:
            return self.type_image(selection)
        if selection.focus and selection.finish:
            return self.finish_image(selection)
        return self.primary_image(), False

    # -- resolution -----------------------------------------------------

    def resolve(self, selection: FastenerSelection) -> FastenerResolution:
        selection = self.validate(selection)
        image, is_override = self.display_image(selection)
        override = image if is_override else ''
        return FastenerResolution(
            selection=selection,
            diameters=self.index.unique_diameters(),
            lengths=self.index.lengths_for_diameter(selection.diameter),
            finishes=self.index.finishes_for(selection.diameter, selection.length, selection.unit),
            types=self.index.types_for(selection.diameter, selection.length, selection.unit),
            diameter_title=self.index.diameter_title(selection.diameter),
            image=image,
            override_image=override,
            gallery=self.display_gallery(override),
        )


class FittingConfigurator(_GalleryMixin):
    """Size label -> finish cascade for fitting and hardware products."""

    def __init__(
        self,
        index: FittingIndex,
        finish_images: Optional[Mapping[str, str]] = None,
        gallery: Sequence[str] = (),
        placeholder: str = '',
    ):
        self.index = index
        self.finish_images = dict(finish_images or {})
        self.gallery = tuple(image for image in gallery if image)
        self.placeholder = placeholder

    def load(self) -> FittingSelection:
        sizes = self.index.size_labels()
        if not sizes:
            return FittingSelection()
        return self.validate(FittingSelection(size_label=sizes[0]))

    def select_size(self, selection: FittingSelection, size_label: str) -> FittingSelection:
        return self.validate(replace(selection, size_label=_clean(size_label)))

    def select_finish(self, selection: FittingSelection, finish: str) -> FittingSelection:
        return self.validate(replace(selection, finish=_clean(finish)))

    def validate(self, selection: FittingSelection) -> FittingSelection:
        size_label = selection.size_label
        if size_label and size_label not in self.index.size_labels():
            logger.debug("Dropping unknown size label %r", size_label)
            size_label = ''
        if not size_label:
            return FittingSelection()

        finish = selection.finish
        finishes = self.index.finishes_for_size(size_label)
        if finish not in finishes:
            finish = finishes[0] if finishes else ''
        return FittingSelection(size_label=size_label, finish=finish)

    def finish_image(self, selection: FittingSelection) -> Tuple[str, bool]:
        if selection.size_label and selection.finish:
            variant = self.index.variant_for(selection.size_label, selection.finish)
            if variant is not None and variant.image:
                return variant.image, True
            if self.finish_images.get(selection.finish):
                return self.finish_images[selection.finish], True
        return self.primary_image(), False

    def resolve(self, selection: FittingSelection) -> FittingResolution:
        selection = self.validate(selection)
        image, is_override = self.finish_image(selection)
        override = image if is_override else ''
        return FittingResolution(
            selection=selection,
            sizes=self.index.size_labels(),
            finishes=self.index.finishes_for_size(selection.size_label),
            image=image,
            override_image=override,
            gallery=self.display_gallery(override),
        )
