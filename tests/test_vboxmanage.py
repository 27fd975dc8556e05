"""Tests for the VBoxManage client and the name helpers."""
import subprocess
import unittest

from vboxctl.error_handling import ProcessError
from vboxctl.vboxmanage import VBoxManage, extract_names, filter_names, matches

from tests.fakes import FAKE_UUID, FakeRunner


class ExtractNamesTest(unittest.TestCase):

    def test_names_in_output_order(self):
        output = (
            f'"WEB-01" {{{FAKE_UUID}}}\n'
            f'"DC-01" {{{FAKE_UUID}}}\n'
            f'"DC 02 (copy)" {{{FAKE_UUID}}}\n'
        )
        self.assertEqual(extract_names(output), ["WEB-01", "DC-01", "DC 02 (copy)"])

    def test_lines_without_quotes_are_ignored(self):
        output = 'WARNING: something odd\n"DC-01" {uuid}\n\n'
        self.assertEqual(extract_names(output), ["DC-01"])

    def test_span_is_greedy_within_a_line(self):
        self.assertEqual(extract_names('"my "odd" vm" {uuid}'), ['my "odd" vm'])

    def test_duplicates_are_kept(self):
        self.assertEqual(extract_names('"a" {1}\n"a" {2}\n'), ["a", "a"])

    def test_empty_output(self):
        self.assertEqual(extract_names(""), [])


class MatchingTest(unittest.TestCase):

    def test_plain_substring(self):
        self.assertTrue(matches("MY-DC-001", "DC"))
        self.assertTrue(matches("DC-01", "DC-01"))
        self.assertFalse(matches("WEB-01", "DC"))

    def test_case_sensitive(self):
        self.assertFalse(matches("DC-01", "dc"))

    def test_no_glob_or_regex_meaning(self):
        self.assertFalse(matches("DC-01", "DC*"))
        self.assertFalse(matches("DC-01", "D.-01"))
        self.assertTrue(matches("lab*box", "*"))

    def test_filter_keeps_inventory_order(self):
        names = ["DC-02", "WEB-01", "DC-01"]
        self.assertEqual(filter_names(names, "DC"), ["DC-02", "DC-01"])
        self.assertEqual(filter_names(names, "nothing"), [])

    def test_exact_filter_ignores_containing_names(self):
        names = ["B", "A-B", "B"]
        self.assertEqual(filter_names(names, "B", exact=True), ["B", "B"])
        self.assertEqual(filter_names(names, "A", exact=True), [])


class VBoxManageTest(unittest.TestCase):

    def test_run_invokes_binary_with_arguments(self):
        runner = FakeRunner()
        client = VBoxManage("/usr/bin/VBoxManage", runner=runner, timeout=30)

        client.run("list", "vms")

        self.assertEqual(runner.calls, [["/usr/bin/VBoxManage", "list", "vms"]])
        self.assertTrue(runner.kwargs[0]["capture_output"])
        self.assertTrue(runner.kwargs[0]["text"])
        self.assertEqual(runner.kwargs[0]["timeout"], 30)

    def test_non_zero_exit_raises_process_error(self):
        runner = FakeRunner(failures={("controlvm", "DC-01", "pause"): 1})
        client = VBoxManage(runner=runner)

        with self.assertRaises(ProcessError) as ctx:
            client.control_vm("DC-01", "pause")

        self.assertEqual(ctx.exception.returncode, 1)
        self.assertEqual(ctx.exception.code, "VBOX-E700")
        self.assertIn("controlvm", ctx.exception.details)

    def test_unchecked_run_returns_failed_result(self):
        runner = FakeRunner(failures={("list", "vms"): 2})
        result = VBoxManage(runner=runner).run("list", "vms", check=False)
        self.assertEqual(result.returncode, 2)

    def test_missing_binary(self):
        def runner(cmd_list, **kwargs):
            raise FileNotFoundError(2, "No such file", cmd_list[0])

        with self.assertRaises(ProcessError) as ctx:
            VBoxManage("VBoxManage", runner=runner).run("list", "vms")
        self.assertEqual(ctx.exception.code, "VBOX-E701")

    def test_timeout(self):
        def runner(cmd_list, **kwargs):
            raise subprocess.TimeoutExpired(cmd_list, kwargs["timeout"])

        with self.assertRaises(ProcessError) as ctx:
            VBoxManage(runner=runner, timeout=5).start_vm("DC-01")
        self.assertEqual(ctx.exception.code, "VBOX-E702")

    def test_list_vms_and_running_vms(self):
        runner = FakeRunner(all_vms=["DC-01", "WEB-01"], running_vms=["WEB-01"])
        client = VBoxManage(runner=runner)

        self.assertEqual(client.list_vms(), ["DC-01", "WEB-01"])
        self.assertEqual(client.list_running_vms(), ["WEB-01"])

    def test_failed_listing_yields_empty_list(self):
        runner = FakeRunner(all_vms=["DC-01"], failures={("list", "vms"): 1})
        self.assertEqual(VBoxManage(runner=runner).list_vms(), [])

    def test_start_vm_arguments(self):
        runner = FakeRunner()
        VBoxManage(runner=runner).start_vm("DC-01")
        VBoxManage(runner=runner).start_vm("DC-02", "gui")
        self.assertEqual(runner.invocations("startvm"), [
            ["startvm", "DC-01", "--type", "headless"],
            ["startvm", "DC-02", "--type", "gui"],
        ])

    def test_control_vm_arguments(self):
        runner = FakeRunner()
        VBoxManage(runner=runner).control_vm("GAME SRV", "acpipowerbutton")
        self.assertEqual(runner.invocations("controlvm"), [["controlvm", "GAME SRV", "acpipowerbutton"]])


if __name__ == '__main__':
    unittest.main()
