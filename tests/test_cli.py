import contextlib
import io
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from tests._test_path import SRC, make_png  # noqa: F401

from pixiedust import cli
from pixiedust.core.models import CropSpec, Dimensions, ResizePolicy


class TestArgs(unittest.TestCase):
    def _params(self, argv):
        args = cli._build_arg_parser().parse_args(argv)
        return cli._params_from_args(args)

    def test_defaults(self):
        p = self._params(["in.jpg", "-o", "out.webp"])
        self.assertEqual(p.input_path, "in.jpg")
        self.assertEqual(p.static_bound, Dimensions(1920, 1080))
        self.assertEqual(p.animated_bound, Dimensions(800, 600))
        self.assertIs(p.policy, ResizePolicy.FIT)
        self.assertIsNone(p.crop)
        self.assertEqual(p.quality, 30)

    def test_crop_flags(self):
        p = self._params(["-i", "in.jpg", "-o", "o.webp", "--crop", "--crop-width", "40",
                          "--crop-height", "30", "--crop-x", "100", "--crop-y", "50", "--resize-fill"])
        self.assertEqual(p.crop, CropSpec(100, 50, 40, 30))
        self.assertIs(p.policy, ResizePolicy.FILL)

    def test_crop_size_shorthand(self):
        p = self._params(["in.jpg", "-o", "o.webp", "--crop-size", "400x300"])
        self.assertEqual(p.crop, CropSpec(0, 0, 400, 300))

    def test_crop_size_rejects_bad_format(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                self._params(["in.jpg", "-o", "o.webp", "--crop-size", "400by300"])

    def test_crop_size_conflicts_with_crop_flags(self):
        for extra in (["--crop"], ["--crop-width", "40"], ["--crop-height", "30"]):
            with contextlib.redirect_stderr(io.StringIO()) as err:
                with self.assertRaises(SystemExit) as ctx:
                    cli.main(["in.jpg", "-o", "o.webp", "--crop-size", "400x300"] + extra)
            self.assertEqual(ctx.exception.code, 2)
            self.assertIn("--crop-size", err.getvalue())

    def test_input_required(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                cli.main(["-o", "o.webp"])
        self.assertEqual(ctx.exception.code, 2)


class TestMain(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.src = self.tmp / "in.png"
        self.src.write_bytes(make_png(300, 100))

    def tearDown(self):
        self._tmp.cleanup()

    def test_success(self):
        out = self.tmp / "out.webp"
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            rc = cli.main([str(self.src), "-o", str(out), "--width", "150", "--height", "150", "--report"])
        self.assertEqual(rc, 0)
        self.assertIn("Saved:", stdout.getvalue())
        self.assertIn("PixieDust Run Report", stdout.getvalue())
        with Image.open(out) as img:
            self.assertEqual(img.size, (150, 50))

    def test_failure_returns_2_with_stage(self):
        out = self.tmp / "out.webp"
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            rc = cli.main([str(self.src), "-o", str(out), "--crop-size", "500x500"])
        self.assertEqual(rc, 2)
        self.assertIn("ERROR: [crop]", stderr.getvalue())
        self.assertFalse(out.exists())
