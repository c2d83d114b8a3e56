# app/services/automation_service.py
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.automation import AutomationLog, AutomationRule
from app.models.enums import AutomationRuleCategory
from app.services.errors import ConflictError, NotFoundError, flush_or_conflict

logger = logging.getLogger("hat.automation")

UTC = timezone.utc


def _dump(value: Any) -> str:
    return json.dumps(value if value is not None else {}, ensure_ascii=False, default=str, sort_keys=True)


class AutomationService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_rule(self, rule_id: int) -> AutomationRule:
        rule = await self.session.get(AutomationRule, int(rule_id))
        if rule is None:
            raise NotFoundError(f"automation rule {rule_id} not found")
        return rule

    async def active_rules(self, trigger: Optional[str] = None) -> List[AutomationRule]:
        stmt = select(AutomationRule).where(AutomationRule.is_active.is_(True))
        if trigger:
            stmt = stmt.where(AutomationRule.trigger == trigger)
        stmt = stmt.order_by(AutomationRule.priority.desc(), AutomationRule.rule_name)
        return list((await self.session.execute(stmt)).scalars())

    async def create_rule(
        self,
        *,
        user_id: str,
        rule_name: str,
        description: str,
        trigger: str,
        conditions: Any = None,
        actions: Any = None,
        category: int = AutomationRuleCategory.GENERAL,
        priority: int = 0,
        trigger_type: Optional[str] = None,
        display_name: Optional[str] = None,
    ) -> AutomationRule:
        name = (rule_name or "").strip()
        if not name:
            raise ValueError("rule_name is required")
        dup = await self.session.execute(select(AutomationRule.id).where(AutomationRule.rule_name == name).limit(1))
        if dup.first() is not None:
            raise ConflictError(f"automation rule {name} already exists")

        rule = AutomationRule(
            rule_name=name,
            name=display_name or name,
            description=description,
            is_active=True,
            trigger=trigger,
            trigger_type=trigger_type or trigger,
            conditions_json=_dump(conditions),
            actions_json=_dump(actions),
            created_by_user_id=user_id,
            last_modified=datetime.now(UTC),
            trigger_count=0,
            execution_count=0,
            priority=int(priority),
            category=int(AutomationRuleCategory(category)),
            has_execution_errors=False,
        )
        self.session.add(rule)
        await flush_or_conflict(self.session)
        logger.info("automation rule created %s", rule.rule_name)
        return rule

    async def set_active(self, rule_id: int, active: bool) -> AutomationRule:
        rule = await self.get_rule(rule_id)
        rule.is_active = bool(active)
        now = datetime.now(UTC)
        rule.last_modified = now
        rule.last_modified_date = now
        await flush_or_conflict(self.session)
        return rule

    async def record_execution(
        self,
        rule_id: int,
        *,
        action: str,
        success: bool,
        details: Any = None,
        error: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> AutomationLog:
        """
        Append an AutomationLogs row and update the rule's counters.

        A failed run sets HasExecutionErrors / LastExecutionError; a later
        successful run leaves them as they are.
        """
        rule = await self.get_rule(rule_id)
        now = datetime.now(UTC)

        entry = AutomationLog(
            automation_rule_id=rule.id,
            rule_id=rule.id,
            executed_at=now,
            timestamp=now,
            success=bool(success),
            error_message=error,
            executed_by_user_id=user_id,
            action=action,
            execution_details_json=_dump(details),
        )
        self.session.add(entry)

        rule.execution_count += 1
        rule.trigger_count += 1
        rule.last_executed_date = now
        if not success:
            rule.has_execution_errors = True
            rule.last_execution_error = error or "execution failed"
            logger.warning("automation rule %s failed: %s", rule.rule_name, rule.last_execution_error)

        await flush_or_conflict(self.session)
        return entry

    async def logs(self, rule_id: int, *, limit: int = 100) -> List[AutomationLog]:
        stmt = (
            select(AutomationLog)
            .where(AutomationLog.rule_id == rule_id)
            .order_by(AutomationLog.timestamp.desc(), AutomationLog.id.desc())
            .limit(limit)
        )
        return list((await self.session.execute(stmt)).scalars())
