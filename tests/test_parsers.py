"""
Tests for the M3U and TXT source parsers
"""
import unittest

from iptv_catalog.errors import ParseError
from iptv_catalog.parsers import M3uParser, TxtParser, default_parsers


M3U_SOURCE = """#EXTM3U x-tvg-url="http://example.com/epg.xml"
#EXTINF:-1 tvg-id="cctv1" tvg-name="CCTV1" tvg-logo="http://logo/cctv1.png" group-title="央视频道",CCTV-1 综合
http://stream/cctv1
#EXTINF:-1 tvg-name="湖南卫视" group-title="卫视频道",湖南卫视
http://stream/hunan
#EXTINF:-1 tvg-name="CCTV1" group-title="央视频道",CCTV-1 综合
http://stream/cctv1-backup
#EXTINF:-1,No Group
http://stream/nogroup
#EXTINF:-1 group-title="Commas, Inc",Name, With Comma
#EXTVLCOPT:http-user-agent=Test
http://stream/comma
"""

TXT_SOURCE = """央视频道,#genre#
CCTV1,http://stream/cctv1
CCTV2,http://stream/cctv2#http://stream/cctv2-b

卫视频道,#genre#
湖南卫视,http://stream/hunan
CCTV1,http://stream/cctv1-in-sat
湖南卫视,http://stream/hunan-b
garbage line without comma
"""


class TestM3uParser(unittest.TestCase):
    def setUp(self):
        self.parser = M3uParser()

    def test_supports_extm3u_header(self):
        self.assertTrue(self.parser.supports("http://x/list", M3U_SOURCE))
        self.assertTrue(self.parser.supports("http://x/list", "\ufeff\n  #extm3u\n"))
        self.assertFalse(self.parser.supports("http://x/list.m3u", TXT_SOURCE))
        self.assertFalse(self.parser.supports("http://x/list.m3u", ""))

    def test_supports_header_after_bom_and_whitespace(self):
        self.assertTrue(self.parser.supports("http://x/list", "\ufeff  #EXTM3U\n"))
        self.assertTrue(self.parser.supports("http://x/list", "\ufeff\t\n#EXTM3U\n"))

    def test_groups_follow_first_seen_order(self):
        groups = self.parser.parse(M3U_SOURCE)

        self.assertEqual(
            [group.name for group in groups],
            ["央视频道", "卫视频道", "Other", "Commas, Inc"],
        )

    def test_same_name_entries_merge_urls(self):
        groups = self.parser.parse(M3U_SOURCE)
        cctv = groups[0].channels

        self.assertEqual(len(cctv), 1)
        self.assertEqual(cctv[0].name, "CCTV-1 综合")
        self.assertEqual(cctv[0].url_list, ("http://stream/cctv1", "http://stream/cctv1-backup"))
        self.assertEqual(cctv[0].url, "http://stream/cctv1")
        self.assertEqual(cctv[0].logo, "http://logo/cctv1.png")
        self.assertEqual(cctv[0].epg_name, "CCTV1")
        self.assertEqual(cctv[0].metadata, {"tvg-id": "cctv1"})

    def test_name_after_quoted_comma(self):
        groups = self.parser.parse(M3U_SOURCE)
        channel = groups[3].channels[0]

        self.assertEqual(channel.name, "Name, With Comma")
        self.assertEqual(channel.url, "http://stream/comma")

    def test_playlist_without_channels_raises(self):
        with self.assertRaises(ParseError):
            self.parser.parse("#EXTM3U\n#EXTINF:-1,Dangling\n")


class TestTxtParser(unittest.TestCase):
    def setUp(self):
        self.parser = TxtParser()

    def test_supports_genre_marker(self):
        self.assertTrue(self.parser.supports("http://x/list.txt", TXT_SOURCE))
        self.assertFalse(self.parser.supports("http://x/list.txt", "CCTV1,http://a\n"))

    def test_parse_groups_and_channels(self):
        groups = self.parser.parse(TXT_SOURCE)

        self.assertEqual([group.name for group in groups], ["央视频道", "卫视频道"])
        self.assertEqual(
            [channel.name for channel in groups[0].channels], ["CCTV1", "CCTV2"]
        )
        self.assertEqual(
            groups[0].channels[1].url_list, ("http://stream/cctv2", "http://stream/cctv2-b")
        )

    def test_same_name_is_merged_within_group_only(self):
        groups = self.parser.parse(TXT_SOURCE)
        satellite = groups[1].channels

        self.assertEqual([channel.name for channel in satellite], ["湖南卫视", "CCTV1"])
        self.assertEqual(satellite[0].url_list, ("http://stream/hunan", "http://stream/hunan-b"))
        self.assertEqual(groups[0].channels[0].url_list, ("http://stream/cctv1",))

    def test_channels_before_first_marker_go_to_default_group(self):
        groups = self.parser.parse("Loose,http://a/1\nNews,#genre#\nBBC,http://a/2\n")

        self.assertEqual([group.name for group in groups], ["Other", "News"])

    def test_empty_groups_are_omitted(self):
        groups = self.parser.parse("Empty,#genre#\nNews,#genre#\nBBC,http://a/2\n")

        self.assertEqual([group.name for group in groups], ["News"])

    def test_bom_before_indented_first_line(self):
        groups = self.parser.parse("\ufeff  News,#genre#\nBBC,http://a/2\n")

        self.assertEqual([group.name for group in groups], ["News"])

    def test_markers_only_raises(self):
        with self.assertRaises(ParseError):
            self.parser.parse("Empty,#genre#\n")


class TestDefaultParsers(unittest.TestCase):
    def test_m3u_is_registered_before_txt(self):
        parsers = default_parsers()

        self.assertIsInstance(parsers[0], M3uParser)
        self.assertIsInstance(parsers[1], TxtParser)


if __name__ == "__main__":
    unittest.main()
