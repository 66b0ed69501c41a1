import math
from typing import Any, Dict, List
from gacha_api.banner_rules import (
    TIER_ORDER,
    FATAL_MISSING_ITEM_FIELDS,
    FATAL_PITY_FIELDS,
    OPTIONAL_ITEM_FIELDS,
)


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _check_tier_rates(tier_rates: Any, errors: List[Dict[str, str]]) -> List[str]:
    """Validates the tier_rates block and returns the tier labels to use."""
    if tier_rates is None:
        return list(TIER_ORDER)

    if not isinstance(tier_rates, dict) or not tier_rates:
        errors.append({
            "path": "$.tier_rates",
            "message": "tier_rates must be a non-empty object of tier -> rate."
        })
        return list(TIER_ORDER)

    for tier, rate in tier_rates.items():
        if not _is_number(rate) or rate < 0:
            errors.append({
                "path": f"$.tier_rates.{tier}",
                "message": "Tier rate must be a finite number >= 0."
            })

    top_tier = next(iter(tier_rates))
    top_rate = tier_rates[top_tier]
    if _is_number(top_rate) and top_rate <= 0:
        errors.append({
            "path": f"$.tier_rates.{top_tier}",
            "message": f"Top tier '{top_tier}' must have a rate > 0."
        })

    return list(tier_rates)


def _check_pity(pity: Any, errors: List[Dict[str, str]]):
    if pity is None:
        return

    if not isinstance(pity, dict):
        errors.append({
            "path": "$.pity",
            "message": "pity must be an object with hard_threshold, soft_start, multiplier."
        })
        return

    missing = [f for f in FATAL_PITY_FIELDS if f not in pity]
    if missing:
        errors.append({
            "path": "$.pity",
            "message": f"Missing required pity fields: {', '.join(missing)}"
        })
        return

    hard = pity["hard_threshold"]
    soft = pity["soft_start"]
    multiplier = pity["multiplier"]

    if not isinstance(hard, int) or isinstance(hard, bool) or hard <= 0:
        errors.append({
            "path": "$.pity.hard_threshold",
            "message": "hard_threshold must be an integer > 0."
        })
        return
    if not isinstance(soft, int) or isinstance(soft, bool) or soft <= 0:
        errors.append({
            "path": "$.pity.soft_start",
            "message": "soft_start must be an integer > 0."
        })
        return
    if soft >= hard:
        errors.append({
            "path": "$.pity.soft_start",
            "message": f"soft_start ({soft}) must be lower than hard_threshold ({hard})."
        })
    if not _is_number(multiplier) or multiplier <= 1.0:
        errors.append({
            "path": "$.pity.multiplier",
            "message": "multiplier must be a finite number > 1.0."
        })


def validate_banner(banner: Any) -> Dict[str, Any]:
    errors: List[Dict[str, str]] = []
    warnings: List[Dict[str, str]] = []

    summary = {
        "total_items": 0,
        "tiers": [],
        "tier_counts": {},
        "tier_weight_totals": {},
    }

    # ---- top-level must be dict ----
    if not isinstance(banner, dict):
        errors.append({
            "path": "$",
            "message": "Top-level banner must be an object/dict."
        })
        return {
            "valid": False,
            "errors": errors,
            "warnings": warnings,
            "summary": summary,
        }

    if not isinstance(banner.get("name"), str) or not banner.get("name", "").strip():
        warnings.append({
            "path": "$.name",
            "message": "Missing banner name (recommended)."
        })

    tiers = _check_tier_rates(banner.get("tier_rates"), errors)
    top_tier = tiers[0]
    summary["tiers"] = tiers
    summary["tier_counts"] = {t: 0 for t in tiers}
    summary["tier_weight_totals"] = {t: 0.0 for t in tiers}

    _check_pity(banner.get("pity"), errors)

    items = banner.get("items")
    if not isinstance(items, dict):
        errors.append({
            "path": "$.items",
            "message": "items must be an object/dict of tier -> list of items."
        })
        return {
            "valid": False,
            "errors": errors,
            "warnings": warnings,
            "summary": summary,
        }

    top_names = []

    # Walk tiers
    for tier, tier_items in items.items():
        if tier not in tiers:
            errors.append({
                "path": f"$.items.{tier}",
                "message": f"Unknown tier '{tier}'. Allowed: {tiers}"
            })
            continue

        if not isinstance(tier_items, list):
            errors.append({
                "path": f"$.items.{tier}",
                "message": "Tier entry must be a list of item objects."
            })
            continue

        # Walk items
        for i, item in enumerate(tier_items):
            path = f"$.items.{tier}[{i}]"

            if not isinstance(item, dict):
                errors.append({
                    "path": path,
                    "message": "Item must be an object/dict."
                })
                continue

            missing = [f for f in FATAL_MISSING_ITEM_FIELDS if f not in item]
            if missing:
                errors.append({
                    "path": path,
                    "message": f"Missing required fields: {', '.join(missing)}"
                })
                continue

            if not isinstance(item["name"], str) or not item["name"].strip():
                errors.append({
                    "path": f"{path}.name",
                    "message": "Item name must be a non-empty string."
                })
                continue

            weight = item["weight"]
            if not _is_number(weight) or weight <= 0:
                errors.append({
                    "path": f"{path}.weight",
                    "message": "weight must be a finite number > 0."
                })
                continue

            # Optional fields warnings (non-fatal)
            for field in OPTIONAL_ITEM_FIELDS:
                if field not in item:
                    warnings.append({
                        "path": path,
                        "message": f"Missing optional field '{field}' (recommended)."
                    })
                elif item[field] is not None and not isinstance(item[field], str):
                    warnings.append({
                        "path": f"{path}.{field}",
                        "message": f"{field} should be a string."
                    })

            summary["total_items"] += 1
            summary["tier_counts"][tier] += 1
            summary["tier_weight_totals"][tier] += weight

            if tier == top_tier:
                top_names.append(item["name"])

    if not top_names:
        errors.append({
            "path": f"$.items.{top_tier}",
            "message": f"At least one {top_tier} item is required for the pity guarantee."
        })

    guaranteed = banner.get("guaranteed")
    if guaranteed is not None and top_names and guaranteed not in top_names:
        errors.append({
            "path": "$.guaranteed",
            "message": f"Guaranteed item '{guaranteed}' is not a {top_tier} item."
        })

    for tier in tiers:
        if tier != top_tier and summary["tier_counts"][tier] == 0:
            warnings.append({
                "path": f"$.items.{tier}",
                "message": f"Tier '{tier}' has no items; draws landing there return a placeholder."
            })

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "warnings": warnings,
        "summary": summary,
    }
