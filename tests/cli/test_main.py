import io
import json
import os
import tempfile
import unittest
from unittest import mock

from domflow.cli.main import main


class TestCLI(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".cfg")
        with os.fdopen(fd, "w") as handle:
            handle.write("! diamond\n1 : 2, 3\n2 : 4\n3 : 4\n")

    def tearDown(self):
        os.remove(self.path)

    def run_main(self, argv):
        with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
            with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
                code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def testDomText(self):
        code, out, _err = self.run_main(["dom", self.path])
        self.assertEqual(code, 0)
        self.assertIn("4 [3] succs=[] preds=[2, 3] doms={1, 4}", out)

    def testDomJson(self):
        code, out, _err = self.run_main(["dom", self.path, "--format", "json"])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["nodes"][3]["dominators"], [1, 4])

    def testDomOutputFile(self):
        fd, output = tempfile.mkstemp(suffix=".dot")
        os.close(fd)
        try:
            code, out, _err = self.run_main(
                ["dom", self.path, "--format", "dot", "-o", output]
            )
            with open(output) as handle:
                text = handle.read()
        finally:
            os.remove(output)

        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertIn("digraph", text)

    def testStdin(self):
        with mock.patch("sys.stdin", io.StringIO("a: b\nb: a\n")):
            code, out, _err = self.run_main(["dom", "-", "--tokens"])
        self.assertEqual(code, 0)
        self.assertIn("b [1] succs=[a] preds=[a] doms={a, b}", out)

    def testParse(self):
        code, out, _err = self.run_main(["parse", self.path])
        self.assertEqual(code, 0)
        self.assertEqual(out, "1: 2, 3\n2: 4\n3: 4\n4\n")

    def testStrictFailure(self):
        with open(self.path, "a") as handle:
            handle.write("4 : five\n")
        code, _out, err = self.run_main(["dom", self.path, "--strict"])
        self.assertEqual(code, 1)
        self.assertIn("line 5", err)

    def testMissingFile(self):
        code, _out, err = self.run_main(["dom", self.path + ".missing"])
        self.assertEqual(code, 1)
        self.assertIn("Error", err)

    def testEmptyInputAborts(self):
        with mock.patch("sys.stdin", io.StringIO("! nothing here\n")):
            code, _out, err = self.run_main(["dom", "-"])
        self.assertEqual(code, 1)
        self.assertIn("declares no blocks", err)
