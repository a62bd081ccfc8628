"""Roll executor - turns a dice expression into one concrete, auditable roll."""

from aws_lambda_powertools import Logger

from roller.resolver import CharacterModifierResolver, NullResolver, resolve_modifier
from shared.dice import DiceRng, RandomDiceRng, roll_dice
from shared.expression import effective_groups, validate_expression
from shared.keep_drop import apply_keep_drop
from shared.models import DiceExpression, DiceGroup, DiceGroupResult, RollResult
from shared.notation import generate_notation
from shared.utils import utc_now

logger = Logger(child=True)


class DiceRoller:
    """Executes dice expressions.

    All randomness comes from the injected DiceRng, so a seeded or scripted
    source makes every roll reproducible.
    """

    def __init__(
        self,
        rng: DiceRng | None = None,
        resolver: CharacterModifierResolver | None = None,
    ) -> None:
        """Initialize dice roller.

        Args:
            rng: Randomness source. Defaults to an unseeded RandomDiceRng.
            resolver: Character modifier resolver. Defaults to NullResolver,
                which rejects every character-derived modifier.
        """
        self.rng = rng or RandomDiceRng()
        self.resolver = resolver or NullResolver()

    def roll_group(self, group: DiceGroup) -> DiceGroupResult:
        """Roll one dice group and apply its keep/drop rule.

        Args:
            group: Group to roll (already validated)

        Returns:
            Rolls with dropped dice flagged, and the sum of the kept dice
        """
        values = roll_dice(self.rng, group.count, group.sides)
        rolls = apply_keep_drop(values, group.keep_drop)
        group_sum = sum(roll.value for roll in rolls if not roll.is_dropped)
        return DiceGroupResult(rolls=rolls, group_sum=group_sum)

    def roll_expression(self, expression: DiceExpression) -> RollResult:
        """Roll a complete dice expression.

        Args:
            expression: Expression to roll

        Returns:
            RollResult with per-group breakdown, resolved modifier and total

        Raises:
            ValidationError: If the expression is empty or out of range
            ResolutionError: If a character modifier cannot be resolved
        """
        validate_expression(expression)
        # Resolve before drawing so a failed resolution leaves the rng untouched
        modifier = resolve_modifier(expression.modifier, self.resolver)

        group_results = [self.roll_group(group) for group in effective_groups(expression)]
        groups_total = sum(result.group_sum for result in group_results)

        total = groups_total + modifier
        notation = generate_notation(expression)

        logger.debug(
            "Expression rolled",
            extra={"notation": notation, "total": total, "modifier": modifier},
        )

        return RollResult(
            group_results=group_results,
            modifier=modifier,
            total=total,
            timestamp=utc_now(),
            notation=notation,
            expression=expression,
        )
