# crew_roster/gui_app.py
# -----------------------------------------------------------------------------
# Tkinter GUI – Crew Roster Dashboard
# Tab 1: CrewTab        – roster with compliance flags, filter by squad
# Tab 2: LeaderboardTab – voyage/host counts, top hosts and voyagers
# Tab 3: ActionsTab     – outstanding action items, most severe first
# Toolbar: Refresh from Sheets / Take Snapshot / Export Report / Export Roster
#
# Display only: all parsing and reporting lives in the services.
# Run:  PYTHONPATH=. python crew_roster/gui_app.py
# -----------------------------------------------------------------------------

import logging
import tkinter as tk
from tkinter import ttk, messagebox, filedialog

from crew_roster.config import Settings, configure_logging
from crew_roster.dashboard_service import DashboardData, fetch_dashboard
from crew_roster.errors import CrewRosterError
from crew_roster.export_service import export_crew_excel, export_monthly_report
from crew_roster.snapshot_service import create_snapshot, save_snapshot
from crew_roster.store import STATE_FILE, JsonFileStore, save_to_csv

log = logging.getLogger(__name__)

ALL_SQUADS = "(all squads)"


def _yes_no(v) -> str:
    return "Yes" if v else "No"


def _make_tree(parent, cols, heads, widths, height=18) -> ttk.Treeview:
    tree = ttk.Treeview(parent, columns=cols, show="headings", height=height)
    for c, h, w in zip(cols, heads, widths):
        tree.heading(c, text=h)
        tree.column(c, width=w, anchor="w")
    yscroll = ttk.Scrollbar(parent, orient="vertical", command=tree.yview)
    tree.configure(yscrollcommand=yscroll.set)
    tree.grid(row=0, column=0, sticky="nsew")
    yscroll.grid(row=0, column=1, sticky="ns")
    parent.grid_rowconfigure(0, weight=1); parent.grid_columnconfigure(0, weight=1)
    return tree


def _clear(tree: ttk.Treeview):
    for iid in tree.get_children():
        tree.delete(iid)


# ================================ TAB 1: CREW ================================
class CrewTab(ttk.Frame):
    def __init__(self, master):
        super().__init__(master, padding=12)
        self.data = DashboardData()
        self._build_ui()

    def _build_ui(self):
        bar = ttk.Frame(self); bar.pack(fill="x", pady=(0, 8))
        ttk.Label(bar, text="Squad:").pack(side="left")
        self.squad_var = tk.StringVar(value=ALL_SQUADS)
        self.cmb_squad = ttk.Combobox(bar, textvariable=self.squad_var, state="readonly", width=28,
                                      values=[ALL_SQUADS])
        self.cmb_squad.pack(side="left", padx=6)
        self.cmb_squad.bind("<<ComboboxSelected>>", lambda _: self._refresh_table())
        self.lbl_summary = ttk.Label(bar, text="")
        self.lbl_summary.pack(side="right")

        body = ttk.Frame(self); body.pack(fill="both", expand=True)
        cols = ("idx", "rank", "name", "squad", "status", "sailing", "hosting", "chat", "voyages", "hosted")
        heads = ["#", "Rank", "Name", "Squad", "Status", "Sailing", "Hosting", "Chat", "Voyages", "Hosted"]
        widths = [40, 70, 180, 160, 110, 70, 70, 50, 70, 70]
        self.tree = _make_tree(body, cols, heads, widths)

    def show(self, data: DashboardData):
        self.data = data
        squads = list(data.summary.get("squads", {}).keys())
        self.cmb_squad["values"] = [ALL_SQUADS] + squads
        if self.squad_var.get() not in self.cmb_squad["values"]:
            self.squad_var.set(ALL_SQUADS)
        s = data.summary
        self.lbl_summary.config(
            text=f"Crew: {s.get('total_crew', 0)}   Compliant: {s.get('compliance_count', 0)} "
                 f"({s.get('compliance_rate', 0)}%)   On LOA: {s.get('on_loa', 0)}"
        )
        self._refresh_table()

    def _refresh_table(self):
        _clear(self.tree)
        squad = self.squad_var.get()
        members = [m for m in self.data.by_seniority if squad == ALL_SQUADS or m.squad == squad]
        for idx, m in enumerate(members, start=1):
            status = "LOA" if m.loa_status else m.compliance_status
            self.tree.insert("", "end", values=(
                idx, m.rank, m.name, m.squad, status,
                _yes_no(m.sailing_compliant), _yes_no(m.hosting_compliant),
                m.chat_activity, m.voyage_count, m.host_count,
            ))


# ============================= TAB 2: LEADERBOARD ============================
class LeaderboardTab(ttk.Frame):
    def __init__(self, master):
        super().__init__(master, padding=12)
        self._build_ui()

    def _build_ui(self):
        paned = ttk.PanedWindow(self, orient="horizontal")
        paned.pack(fill="both", expand=True)

        left = ttk.LabelFrame(paned, text="All sailors"); paned.add(left, weight=3)
        right = ttk.Frame(paned); paned.add(right, weight=2)

        self.tree = _make_tree(
            left,
            ("name", "voyages", "hosted", "last_voyage", "last_host", "inactive"),
            ["Name", "Voyages", "Hosted", "Last Voyage", "Last Hosted", "Days Inactive"],
            [180, 70, 70, 110, 110, 100],
        )

        hosts = ttk.LabelFrame(right, text="Top Hosts"); hosts.pack(fill="both", expand=True)
        voyagers = ttk.LabelFrame(right, text="Top Voyagers"); voyagers.pack(fill="both", expand=True, pady=(8, 0))
        self.tree_hosts = _make_tree(hosts, ("idx", "name", "n"), ["#", "Name", "Hosted"], [40, 180, 70], height=5)
        self.tree_voyagers = _make_tree(voyagers, ("idx", "name", "n"), ["#", "Name", "Voyages"], [40, 180, 70], height=5)

    def show(self, data: DashboardData):
        _clear(self.tree)
        for e in sorted(data.leaderboard, key=lambda e: e.name.lower()):
            self.tree.insert("", "end", values=(
                e.name, e.voyage_count, e.host_count,
                e.last_voyage_date or "", e.last_host_date or "",
                "" if e.days_inactive is None else e.days_inactive,
            ))
        _clear(self.tree_hosts)
        for i, e in enumerate(data.top_hosts, start=1):
            self.tree_hosts.insert("", "end", values=(i, e.name, e.host_count))
        _clear(self.tree_voyagers)
        for i, e in enumerate(data.top_voyagers, start=1):
            self.tree_voyagers.insert("", "end", values=(i, e.name, e.voyage_count))


# =============================== TAB 3: ACTIONS ==============================
class ActionsTab(ttk.Frame):
    def __init__(self, master):
        super().__init__(master, padding=12)
        paned = ttk.PanedWindow(self, orient="vertical")
        paned.pack(fill="both", expand=True)

        top = ttk.Frame(paned); paned.add(top, weight=3)
        bottom = ttk.LabelFrame(paned, text="Awards & Promotions"); paned.add(bottom, weight=1)

        self.tree = _make_tree(
            top,
            ("severity", "sailor", "squad", "responsible", "description", "details", "deadline"),
            ["Severity", "Sailor", "Squad", "Responsible", "Action", "Details", "Deadline"],
            [70, 150, 140, 160, 220, 280, 80],
        )
        self.tree_awards = _make_tree(
            bottom,
            ("sailor", "awards", "promotion"),
            ["Sailor", "Eligible Awards", "Promotion"],
            [150, 420, 320],
            height=6,
        )

    def show(self, data: DashboardData):
        _clear(self.tree)
        for a in data.actions:
            self.tree.insert("", "end", iid=a.id, values=(
                a.severity.upper(), a.sailor, a.squad, a.responsible,
                a.description, a.details, a.deadline or "",
            ))

        _clear(self.tree_awards)
        for m in data.by_seniority:
            awards = data.awards.get(m.name, [])
            check = data.promotions.get(m.name)
            if not awards and not (check and check.ready):
                continue
            promo = f"{check.path.label} ({check.met}/{check.total} auto checks)" if check and check.ready else ""
            self.tree_awards.insert("", "end", values=(m.name, ", ".join(awards), promo))


# =============================== APP (Notebook) ==============================
class App(tk.Tk):
    def __init__(self, settings: Settings):
        super().__init__()
        self.settings = settings
        self.store = JsonFileStore(settings.data_dir / STATE_FILE)
        self.data = None
        self.title("Crew Roster Dashboard")
        self.geometry("1200x780")

        toolbar = ttk.Frame(self, padding=(12, 8, 12, 0)); toolbar.pack(fill="x")
        ttk.Button(toolbar, text="Refresh from Sheets", command=self._on_refresh).pack(side="left")
        ttk.Button(toolbar, text="Take Snapshot", command=self._on_snapshot).pack(side="left", padx=12)
        ttk.Button(toolbar, text="Export Report", command=self._on_export_report).pack(side="left")
        ttk.Button(toolbar, text="Export Roster", command=self._on_export_roster).pack(side="left", padx=12)
        self.lbl_updated = ttk.Label(toolbar, text="Not loaded yet")
        self.lbl_updated.pack(side="right")

        # Vertical PanedWindow: top (notebook) / bottom (log)
        paned = ttk.PanedWindow(self, orient="vertical")
        paned.pack(fill="both", expand=True)

        nb = ttk.Notebook(paned); paned.add(nb, weight=4)
        bottom = ttk.LabelFrame(paned, text="Logs"); paned.add(bottom, weight=1)

        self.tab_crew = CrewTab(nb); nb.add(self.tab_crew, text="Crew")
        self.tab_board = LeaderboardTab(nb); nb.add(self.tab_board, text="Leaderboard")
        self.tab_actions = ActionsTab(nb); nb.add(self.tab_actions, text="Actions")

        self.txt_log = tk.Text(bottom, height=8, wrap="word")
        self.txt_log.pack(fill="both", expand=True, padx=6, pady=6)

        self._on_refresh()
        self._schedule_refresh()

    # ---------------------------- helpers ------------------------------------
    def _log(self, msg: str):
        self.txt_log.insert("end", msg + "\n"); self.txt_log.see("end")

    def _schedule_refresh(self):
        self.after(self.settings.refresh_minutes * 60 * 1000, self._auto_refresh)

    def _auto_refresh(self):
        try:
            self._on_refresh(quiet=True)
        finally:
            self._schedule_refresh()

    # ---------------------------- actions ------------------------------------
    def _on_refresh(self, quiet: bool = False):
        try:
            data = fetch_dashboard(self.settings)
        except CrewRosterError as e:
            log.warning("Refresh failed: %s", e)
            self._log(f"❌ Error: {e}")
            if not quiet:
                messagebox.showerror("Refresh Failed", f"{e}")
            return
        except Exception as e:
            log.exception("Unexpected error during refresh")
            self._log(f"❌ Error: {e}")
            if not quiet:
                messagebox.showerror("Refresh Failed", f"{e}")
            return
        self.data = data
        self.tab_crew.show(data)
        self.tab_board.show(data)
        self.tab_actions.show(data)
        self.lbl_updated.config(text=f"Last refresh: {data.generated_on}")
        self._log(f"✅ Loaded {len(data.crew)} crew, {len(data.leaderboard)} leaderboard rows, "
                  f"{len(data.actions)} actions.")

    def _on_snapshot(self):
        if self.data is None:
            messagebox.showwarning("Snapshot", "Refresh from Sheets first.")
            return
        snapshot = create_snapshot(self.data.enriched)
        self._log(save_snapshot(self.store, snapshot))
        out = save_to_csv(snapshot.crew, f"crew_{snapshot.date}.csv", self.settings.data_dir)
        self._log(f"✅ Snapshot roster written to {out}")

    def _on_export_report(self):
        if self.data is None:
            messagebox.showwarning("Export", "Refresh from Sheets first.")
            return
        path = filedialog.asksaveasfilename(
            title="Export monthly report",
            defaultextension=".xlsx",
            initialdir=str(self.settings.data_dir),
            initialfile=f"Ship_Report_{self.data.generated_on[:7]}.xlsx",
            filetypes=[("Excel", "*.xlsx")],
        )
        if not path:
            return
        try:
            out = export_monthly_report(self.data, path)
        except OSError as e:
            messagebox.showerror("Export Failed", f"{e}")
            return
        self._log(f"✅ Report export: {out}")
        messagebox.showinfo("Success", f"Report exported to:\n{out}")

    def _on_export_roster(self):
        if self.data is None:
            messagebox.showwarning("Export", "Refresh from Sheets first.")
            return
        out_path = self.settings.data_dir / "Crew_Roster.xlsx"
        try:
            out = export_crew_excel(self.data.enriched, out_path)
        except OSError as e:
            messagebox.showerror("Export Failed", f"{e}")
            return
        self._log(f"✅ Roster export: {out}")
        messagebox.showinfo("Success", f"Roster exported to:\n{out}")


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = App(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
