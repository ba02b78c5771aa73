import argparse
import unittest

from sitescan.application import ConfigError, ScanConfig
from sitescan.language.java.linemap import DEFAULT_TAB_WIDTH


class TestScanConfig(unittest.TestCase):
    def testDefaults(self):
        config = ScanConfig()
        self.assertEqual(config.tabWidth, DEFAULT_TAB_WIDTH)
        self.assertFalse(config.staleMethodContext)
        self.assertFalse(config.failOnSyntaxError)
        self.assertFalse(config.keepGoing)
        self.assertFalse(config.sharedScanner)

    def testInvalidTabWidth(self):
        with self.assertRaises(ConfigError):
            ScanConfig(tabWidth=0)
        with self.assertRaises(ConfigError):
            ScanConfig(tabWidth="8")

    def testFromArgs(self):
        args = argparse.Namespace(
            tab_width=4,
            stale_method_context=True,
            strict=True,
            keep_going=True,
            shared_scanner=True,
        )
        config = ScanConfig.fromArgs(args)
        self.assertEqual(config.tabWidth, 4)
        self.assertTrue(config.staleMethodContext)
        self.assertTrue(config.failOnSyntaxError)
        self.assertTrue(config.keepGoing)
        self.assertTrue(config.sharedScanner)

    def testFromPartialArgs(self):
        config = ScanConfig.fromArgs(argparse.Namespace(tab_width=2))
        self.assertEqual(config.tabWidth, 2)
        self.assertFalse(config.keepGoing)

    def testRepr(self):
        self.assertIn("tabWidth=8", repr(ScanConfig()))


if __name__ == "__main__":
    unittest.main()
