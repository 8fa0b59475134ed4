import unittest
import os
import shutil
import tempfile
from click.testing import CliRunner
from content_dup_finder.cli import cli
from content_dup_finder.utils import get_digest

class TestCli(unittest.TestCase):
    def setUp(self):
        self.test_dir = os.path.realpath(tempfile.mkdtemp())
        self.root = os.path.join(self.test_dir, 'root')
        os.makedirs(self.root)
        self.db_path = os.path.join(self.test_dir, 'data', 'file.db')
        self.runner = CliRunner()
        for name, content in [('a.txt', b"hello"), ('b.txt', b"hello"), ('c.txt', b"world")]:
            with open(os.path.join(self.root, name), 'wb') as f:
                f.write(content)

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def invoke(self, *args, **kwargs):
        return self.runner.invoke(cli, list(args), **kwargs)

    def scan(self):
        return self.invoke('scan', '--dir', self.root, '--db', self.db_path,
                           '--algorithm', 'sha256', '--no-progress')

    def test_scan_reports_duplicates(self):
        result = self.scan()
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(get_digest(b"hello", 'sha256'), result.output)
        self.assertIn(os.path.join(self.root, 'a.txt'), result.output)
        self.assertIn(os.path.join(self.root, 'b.txt'), result.output)
        self.assertNotIn(os.path.join(self.root, 'c.txt'), result.output)
        self.assertIn("Total: 1 duplicate groups", result.output)

    def test_scan_missing_directory_fails(self):
        result = self.invoke('scan', '--dir', os.path.join(self.test_dir, 'missing'),
                             '--db', self.db_path, '--no-progress')
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("not a directory", result.output)

    def test_check_after_scan(self):
        self.scan()
        result = self.invoke('check', '--db', self.db_path, '--algorithm', 'sha256')
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn(os.path.join(self.root, 'a.txt'), result.output)

    def test_show_digest(self):
        self.scan()
        digest = get_digest(b"world", 'sha256')
        result = self.invoke('show', '--db', self.db_path, '--algorithm', 'sha256', digest.lower())
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.strip(), os.path.join(self.root, 'c.txt'))

    def test_show_unknown_digest(self):
        self.scan()
        result = self.invoke('show', '--db', self.db_path, '--algorithm', 'sha256', 'ABC')
        self.assertNotEqual(result.exit_code, 0)

    def test_algorithm_mismatch_fails(self):
        self.scan()
        result = self.invoke('check', '--db', self.db_path, '--algorithm', 'md5')
        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("sha256", result.output)

    def test_clear(self):
        self.scan()
        result = self.invoke('clear', '--db', self.db_path, '--algorithm', 'sha256', '--yes')
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(os.path.exists(f"{self.db_path}.backup"))
        result = self.invoke('check', '--db', self.db_path, '--algorithm', 'sha256')
        self.assertNotIn(os.path.join(self.root, 'a.txt'), result.output)

if __name__ == '__main__':
    unittest.main()
