import unittest, tempfile, os
from pathlib import Path
from fontbake import bake_bdf_bytes, bake_from_text_format, placeholder_glyph, release
from fontbake.errors import BakeError, BakeErrorCode
from fontfixtures import bdf


class TestBake(unittest.TestCase):
    def test_solid_8x8(self):
        font = bake_bdf_bytes(bdf("8 8 0 0", {65: ["FF"] * 8}), 65, 65)
        self.assertEqual(bytes(font.table), b"\xff" * 8)
        self.assertEqual((font.char_px_width, font.char_px_height), (8, 8))
        self.assertEqual((font.bytes_per_line, font.bytes_per_glyph), (1, 8))

    def test_table_length(self):
        for bbox, start, end in [("8 8 0 0", 65, 65), ("5 7 0 -1", 32, 126), ("12 16 0 -4", 0, 9), ("17 3 0 0", 100, 101)]:
            w, h = map(int, bbox.split()[:2])
            font = bake_bdf_bytes(bdf(bbox, {}), start, end)
            self.assertEqual(len(font.table), -(-w // 8) * h * (end - start + 1))
            self.assertEqual(font.glyph_count, end - start + 1)

    def test_rows_reproduced(self):
        rows = ["1800", "2400", "4200", "7E00", "4240", "42C0", "0000", "FFF0"]
        font = bake_bdf_bytes(bdf("12 8 0 0", {0x41: rows}), 0x40, 0x42)
        glyph = font.glyph(0x41)
        self.assertEqual(glyph, bytes.fromhex("".join(rows)))
        self.assertEqual(font.rows(0x41)[3], [0, 1, 1, 1, 1, 1, 1, 0, 0, 0, 0, 0])
        self.assertTrue(font.pixel(0x41, 9, 5))
        self.assertFalse(font.pixel(0x41, 10, 5))

    def test_lowercase_hex_and_crlf(self):
        data = bdf("8 2 0 0", {66: ["a5", "5a"]}).replace(b"\n", b"\r\n")
        font = bake_bdf_bytes(data, 66, 66)
        self.assertEqual(bytes(font.table), b"\xa5\x5a")

    def test_slots_in_codepoint_order(self):
        data = bdf("8 2 0 0", {67: ["03", "03"], 65: ["01", "01"], 66: ["02", "02"]})
        font = bake_bdf_bytes(data, 65, 67)
        self.assertEqual(bytes(font.table), bytes([1, 1, 2, 2, 3, 3]))

    def test_out_of_range_glyphs_skipped(self):
        data = bdf("8 2 0 0", {64: ["11", "11"], 65: ["22", "22"], 66: ["33", "33"]})
        font = bake_bdf_bytes(data, 65, 65)
        self.assertEqual(bytes(font.table), b"\x22\x22")

    def test_negative_encoding_skipped(self):
        data = bdf("8 2 0 0", {65: ["22", "22"]}).replace(b"ENCODING 65", b"ENCODING -1 65")
        font = bake_bdf_bytes(data, 65, 65)
        self.assertEqual(font.glyph(65), placeholder_glyph(1, 2))


class TestPlaceholder(unittest.TestCase):
    def test_one_byte_rows_alternate(self):
        font = bake_bdf_bytes(bdf("8 4 0 0", {}), 65, 66)
        self.assertEqual(bytes(font.table), bytes([0x55, 0xAA, 0x55, 0xAA] * 2))

    def test_two_byte_rows_alternate(self):
        font = bake_bdf_bytes(bdf("16 3 0 0", {}), 65, 65)
        self.assertEqual(bytes(font.table), bytes([0x55, 0xAA, 0xAA, 0x55, 0x55, 0xAA]))

    def test_wide_rows_repeat_pattern(self):
        font = bake_bdf_bytes(bdf("20 3 0 0", {}), 65, 65)
        self.assertEqual(font.bytes_per_line, 3)
        self.assertEqual(bytes(font.table), bytes([0x55, 0xAA] * 4 + [0x55]))

    def test_absent_glyphs_keep_placeholder(self):
        font = bake_bdf_bytes(bdf("8 4 0 0", {66: ["00"] * 4}), 65, 67)
        self.assertEqual(font.glyph(65), bytes([0x55, 0xAA, 0x55, 0xAA]))
        self.assertEqual(font.glyph(66), bytes(4))
        self.assertEqual(font.glyph(67), bytes([0x55, 0xAA, 0x55, 0xAA]))

    def test_custom_pattern(self):
        self.assertEqual(placeholder_glyph(1, 2, 0xF00F), bytes([0xF0, 0x0F]))


class TestErrors(unittest.TestCase):
    def assertCode(self, code, data, start=65, end=65):
        with self.assertRaises(BakeError) as cm: bake_bdf_bytes(data, start, end)
        self.assertEqual(cm.exception.code, code)
        return cm.exception

    def test_missing_bounding_box(self):
        e = self.assertCode(BakeErrorCode.FONTBOUNDINGBOX_MISSING, b"STARTFONT 2.1\nCHARS 0\nENDFONT\n")
        self.assertIsNone(e.font)

    def test_malformed_bounding_box(self):
        e = self.assertCode(BakeErrorCode.FONTBOUNDINGBOX_MALFORMED, b"FONTBOUNDINGBOX 8 8 0\nENDFONT\n")
        self.assertIsNone(e.font)
        self.assertCode(BakeErrorCode.FONTBOUNDINGBOX_MALFORMED, b"FONTBOUNDINGBOX eight 8 0 0\n")

    def test_malformed_codepoint(self):
        data = bdf("8 2 0 0", {65: ["FF", "FF"]}).replace(b"ENCODING 65", b"ENCODING A")
        e = self.assertCode(BakeErrorCode.CODEPOINT_MALFORMED, data)
        self.assertEqual(len(e.font.table), 2)

    def test_truncated_rows(self):
        data = bdf("8 4 0 0", {65: ["FF", "FF"]}).replace(b"ENDCHAR\nENDFONT\n", b"")
        e = self.assertCode(BakeErrorCode.CHARACTER_BYTES_TRUNCATED, data)
        self.assertIsNotNone(e.font)

    def test_missing_bitmap(self):
        data = b"FONTBOUNDINGBOX 8 2 0 0\nSTARTCHAR A\nENCODING 65\nENDCHAR\n"
        self.assertCode(BakeErrorCode.CHARACTER_BYTES_TRUNCATED, data)

    def test_malformed_rows(self):
        data = bdf("8 2 0 0", {65: ["FF", "G0"]})
        e = self.assertCode(BakeErrorCode.CHARACTER_BYTES_MALFORMED, data)
        # first row landed before the failure
        self.assertEqual(e.font.table[0], 0xFF)
        release(e.font)
        self.assertTrue(e.font.released)

    def test_inverted_range(self):
        self.assertCode(BakeErrorCode.INVALID_RANGE, bdf("8 2 0 0", {}), 66, 65)

    def test_oversized_bounding_box(self):
        e = self.assertCode(BakeErrorCode.ALLOCATION_FAILED, bdf("4000000000 4000000000 0 0", {}))
        self.assertIsNone(e.font)


class TestFile(unittest.TestCase):
    def setUp(self):
        self.folder = tempfile.TemporaryDirectory()
        self.path = Path(self.folder.name) / "font.bdf"

    def tearDown(self): self.folder.cleanup()

    def test_from_file(self):
        with open(self.path, "wb") as f: f.write(bdf("8 8 0 0", {65: ["FF"] * 8}))
        font = bake_from_text_format(self.path, 65, 65)
        self.assertEqual(bytes(font.table), b"\xff" * 8)
        release(font)
        self.assertIsNone(font.table)

    def test_file_not_found(self):
        with self.assertRaises(BakeError) as cm: bake_from_text_format(os.path.join(self.folder.name, "nope.bdf"), 65, 65)
        self.assertEqual(cm.exception.code, BakeErrorCode.FILE_NOT_FOUND)


if __name__ == "__main__": unittest.main()
