"""Tests for the dialog dismissal decision table."""

import pytest
from unittest.mock import Mock, call, patch
from playwright.sync_api import Error as PlaywrightError

from manager_e2e.browser.dialogs import (
    CLOSE_LABEL,
    DISMISS_RULES,
    DismissAction,
    DismissRule,
    choose_dismiss_action,
    dismiss_crop_dialog_if_present,
    dismiss_dialog,
)

from fakes import FakeDialog, make_locator


class TestDismissRules:
    """Tests for the rule table itself."""

    def test_priority_order(self):
        assert [rule.action for rule in DISMISS_RULES] == [
            DismissAction.CONTINUE,
            DismissAction.CONFIRM,
            DismissAction.CLOSE,
            DismissAction.ICON_BUTTON,
            DismissAction.LAST_NATIVE_BUTTON,
            DismissAction.LAST_ROLE_BUTTON,
        ]

    def test_only_fallback_rows_pick_last(self):
        picks_last = {rule.action for rule in DISMISS_RULES if rule.pick_last}
        assert picks_last == {DismissAction.LAST_NATIVE_BUTTON, DismissAction.LAST_ROLE_BUTTON}


class TestChooseDismissAction:
    """Tests for choose_dismiss_action."""

    def test_cancel_only_dialog_selects_close(self):
        dialog = FakeDialog(["Cancelar"])

        rule, target = choose_dismiss_action(dialog)

        assert rule.action == DismissAction.CLOSE
        assert target is dialog.buttons["Cancelar"]

    def test_confirm_beats_cancel(self):
        dialog = FakeDialog(["Cancelar", "Salvar"])

        rule, target = choose_dismiss_action(dialog)

        assert rule.action == DismissAction.CONFIRM
        assert target is dialog.buttons["Salvar"]

    def test_continue_beats_confirm(self):
        dialog = FakeDialog(["Aplicar", "Continuar"])

        rule, target = choose_dismiss_action(dialog)

        assert rule.action == DismissAction.CONTINUE
        assert target is dialog.buttons["Continuar"]

    @pytest.mark.parametrize("label", ["OK", "Recortar", "Concluir", "Confirmar recorte"])
    def test_confirm_labels(self, label):
        rule, _ = choose_dismiss_action(FakeDialog([label]))
        assert rule.action == DismissAction.CONFIRM

    def test_close_icon(self):
        dialog = FakeDialog(["×"])

        rule, target = choose_dismiss_action(dialog)

        assert rule.action == DismissAction.CLOSE
        assert target is dialog.buttons["×"]

    def test_ok_must_be_a_word(self):
        dialog = FakeDialog(["Voltar", "Okay"])

        rule, target = choose_dismiss_action(dialog)

        assert rule.action == DismissAction.LAST_NATIVE_BUTTON
        assert target is dialog.buttons["Okay"]

    def test_icon_button(self):
        dialog = FakeDialog(["Voltar"], icon_buttons=1)

        rule, target = choose_dismiss_action(dialog)

        assert rule.action == DismissAction.ICON_BUTTON
        assert target is dialog.icon_buttons[0]

    def test_no_controls(self):
        assert choose_dismiss_action(FakeDialog([])) is None

    def test_rule_that_cannot_count_is_skipped(self):
        dialog = FakeDialog(["Fechar"])
        rules = (
            DismissRule(
                DismissAction.CONFIRM,
                lambda d: make_locator(count_error=PlaywrightError("detached")),
            ),
            DismissRule(DismissAction.CLOSE, lambda d: d.get_by_role("button", name=CLOSE_LABEL)),
        )

        rule, target = choose_dismiss_action(dialog, rules)

        assert rule.action == DismissAction.CLOSE
        assert target is dialog.buttons["Fechar"]


class TestDismissDialog:
    """Tests for dismiss_dialog."""

    def test_clicks_chosen_control(self):
        page = Mock()
        dialog = FakeDialog(["Cancelar"])

        assert dismiss_dialog(page, dialog) == DismissAction.CLOSE

        dialog.buttons["Cancelar"].click.assert_called_once_with(force=True)
        page.keyboard.press.assert_not_called()
        dialog.wait_for.assert_any_call(state="hidden", timeout=5000)

    def test_click_failure_propagates(self):
        dialog = FakeDialog(["Salvar"])
        dialog.buttons["Salvar"].click.side_effect = PlaywrightError("intercepted")

        with pytest.raises(PlaywrightError):
            dismiss_dialog(Mock(), dialog)

    def test_keyboard_fallback(self):
        page = Mock()
        dialog = FakeDialog([])

        assert dismiss_dialog(page, dialog) == DismissAction.KEYBOARD
        assert page.keyboard.press.call_args_list == [call("Enter"), call("Escape")]

    def test_keyboard_fallback_stops_when_dialog_closes(self):
        page = Mock()
        dialog = FakeDialog([])
        dialog.is_visible.return_value = False

        dismiss_dialog(page, dialog)

        page.keyboard.press.assert_called_once_with("Enter")

    def test_wait_timeouts_are_ignored(self, timeout_error):
        dialog = FakeDialog(["Fechar"])
        dialog.wait_for.side_effect = timeout_error

        assert dismiss_dialog(Mock(), dialog) == DismissAction.CLOSE


class TestDismissCropDialog:
    """Tests for dismiss_crop_dialog_if_present."""

    @pytest.fixture
    def waits(self):
        return []

    @pytest.fixture
    def page(self, waits):
        def time_out(state="visible", timeout=None):
            waits.append((state, timeout))
            raise PlaywrightError(f"Timeout {timeout}ms exceeded.")

        page = Mock()
        for locator in (
            page.get_by_text.return_value.first,
            page.get_by_role.return_value.first,
            page.locator.return_value.first,
            page.locator.return_value.filter.return_value.first,
        ):
            locator.is_visible.return_value = False
            locator.wait_for.side_effect = time_out
        return page

    def test_nothing_to_dismiss(self, page):
        assert dismiss_crop_dialog_if_present(page, 1500) is False

    def test_only_dialog_waits_block(self, page, waits):
        assert dismiss_crop_dialog_if_present(page, 20000) is False

        assert waits == [("visible", 20000), ("visible", 20000)]
        assert sum(timeout for _, timeout in waits) == 40000

    def test_crop_heading_with_continue(self, page):
        page.get_by_text.return_value.first.is_visible.return_value = True
        page.get_by_role.return_value.first.is_visible.return_value = True

        assert dismiss_crop_dialog_if_present(page, 1500) is True
        page.get_by_role.return_value.first.click.assert_called_once_with(force=True)

    def test_heading_probe_error_is_not_visible(self, page):
        page.get_by_text.return_value.first.is_visible.side_effect = PlaywrightError("detached")

        assert dismiss_crop_dialog_if_present(page, 1500) is False

    def test_page_level_continue(self, page, waits):
        page.get_by_role.return_value.first.is_visible.return_value = True

        assert dismiss_crop_dialog_if_present(page, 20000) is True
        page.get_by_role.return_value.first.click.assert_called_once_with(force=True)
        assert ("visible", 20000) not in waits

    def test_crop_dialog_is_dismissed(self, page):
        crop_dialogs = page.locator.return_value.filter.return_value
        crop_dialogs.first.wait_for.side_effect = None
        crop_dialogs.count.return_value = 1
        active = crop_dialogs.nth.return_value
        active.is_visible.return_value = True

        with patch("manager_e2e.browser.dialogs.dismiss_dialog") as dismiss:
            assert dismiss_crop_dialog_if_present(page, 1500) is True

        dismiss.assert_called_once_with(page, active)
