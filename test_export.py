import os
import tempfile
import unittest

from openpyxl import load_workbook

from main import export_to_excel
from wiring_core.models import CableSizingInput, InstallationMethod
from regulations.cable_sizing import CableSizer


class TestExcelExport(unittest.TestCase):

    def test_schedule_workbook(self):
        print("\n--- TEST: Excel cable schedule ---")
        rows = []
        for name, data in [("Cooker", CableSizingInput(32, 20, InstallationMethod.C)),
                           ("Feeder", CableSizingInput(800, 20, InstallationMethod.C))]:
            rows.append((name, data, CableSizer.calculate(data)))

        with tempfile.TemporaryDirectory() as tmp:
            path = export_to_excel(rows, os.path.join(tmp, "schedule.xlsx"))
            wb = load_workbook(path)

        self.assertEqual(wb.sheetnames, ["Cable Schedule", "Ref Table 4D2A"])
        ws = wb["Cable Schedule"]
        self.assertEqual(ws["A1"].value, "Circuit")
        self.assertTrue(ws["A1"].font.bold)
        self.assertEqual(ws["A2"].value, "Cooker")
        self.assertEqual(ws["F2"].value, 4)
        self.assertEqual(ws["L2"].value, "32A MCB or RCBO")
        self.assertEqual(ws["J3"].value, "FAIL")
        self.assertEqual(ws["L3"].value, "Custom")
        self.assertEqual(wb["Ref Table 4D2A"].max_row, 17)


if __name__ == '__main__':
    unittest.main()
