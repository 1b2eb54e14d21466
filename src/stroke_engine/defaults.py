"""Reference strokes for the built-in gesture vocabulary.

Raw screen-space samples, one per gesture class. They are normalized
when a library is built, so the coordinates here are never used as-is.
"""

from __future__ import annotations

X_STROKE = (
    (87, 142), (89, 145), (91, 148), (93, 151), (96, 155), (98, 157), (100, 160), (102, 162),
    (106, 167), (108, 169), (110, 171), (115, 177), (119, 183), (123, 189), (127, 193), (129, 196),
    (133, 200), (137, 206), (140, 209), (143, 212), (146, 215), (151, 220), (153, 222), (155, 223),
    (157, 225), (158, 223), (157, 218), (155, 211), (154, 208), (152, 200), (150, 189), (148, 179),
    (147, 170), (147, 158), (147, 148), (147, 141), (147, 136), (144, 135), (142, 137), (140, 139),
    (135, 145), (131, 152), (124, 163), (116, 177), (108, 191), (100, 206), (94, 217), (91, 222),
    (89, 225), (87, 226), (87, 224),
)

CHECK_STROKE = (
    (91, 185), (93, 185), (95, 185), (97, 185), (100, 188), (102, 189), (104, 190), (106, 193),
    (108, 195), (110, 198), (112, 201), (114, 204), (115, 207), (117, 210), (118, 212), (120, 214),
    (121, 217), (122, 219), (123, 222), (124, 224), (126, 226), (127, 229), (129, 231), (130, 233),
    (129, 231), (129, 228), (129, 226), (129, 224), (129, 221), (129, 218), (129, 212), (129, 208),
    (130, 198), (132, 189), (134, 182), (137, 173), (143, 164), (147, 157), (151, 151), (155, 144),
    (161, 137), (165, 131), (171, 122), (174, 118), (176, 114), (177, 112), (177, 114), (175, 116),
    (173, 118),
)

# Registration order of the closed default vocabulary
DEFAULT_STROKES: dict[str, tuple[tuple[int, int], ...]] = {
    "x": X_STROKE,
    "check": CHECK_STROKE,
}
