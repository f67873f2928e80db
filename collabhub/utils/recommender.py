# collabhub/utils/recommender.py
import Levenshtein
from typing import List, Dict, Set

# 低於此相似度的技能不列入計分
FUZZY_THRESHOLD = 0.7

# (輔助函式) 取得兩個字串的 Levenshtein 相似度 (0.0 ~ 1.0)
def _get_string_similarity(s1: str, s2: str) -> float:
    # Levenshtein.distance 算出的是 "編輯距離"，標準化為 "相似度"
    if not s1 or not s2:
        return 0.0
    distance = Levenshtein.distance(s1.lower(), s2.lower())
    max_len = max(len(s1), len(s2))
    return 1.0 - (distance / max_len)

def normalize_skills(skills) -> Set[str]:
    """把技能列表轉成小寫集合 (忽略空白與 None)"""
    return {s.strip().lower() for s in (skills or []) if s and s.strip()}

def calculate_recommendation_scores(
    # 'source_skill_names' (e.g., 登入者 Profile 的技能)
    source_skill_names: Set[str],
    # 'target_items' (e.g., 所有招募中的案件)
    target_items: List[Dict]
) -> List[Dict]:
    """
    計算來源 (Source) 與所有目標 (Target) 的推薦分數

    target_items 每筆格式: {"item_id", "skill_names", "item_object", "tiebreaker"}
    分數相同時依 tiebreaker 由大到小排序 (案件用建立時間，越新越前面)
    """
    recommendations = []

    if not source_skill_names:
        return []

    for item in target_items:
        item_skill_names = item.get("skill_names", set())
        if not item_skill_names:
            continue

        total_score = 0.0

        # 1. 標籤重疊度
        exact_matches = source_skill_names.intersection(item_skill_names)
        total_score += len(exact_matches) * 1.0

        # 2. Levenshtein 相似度 (只比對沒有完全命中的技能)
        source_fuzzy_tags = source_skill_names - exact_matches
        item_fuzzy_tags = item_skill_names - exact_matches

        for s_tag in source_fuzzy_tags:
            best_match_score = 0.0
            for i_tag in item_fuzzy_tags:
                similarity = _get_string_similarity(s_tag, i_tag)
                if similarity > FUZZY_THRESHOLD:
                    best_match_score = max(best_match_score, similarity)

            total_score += best_match_score

        if total_score > 0:
            recommendations.append({
                "item_id": item.get("item_id"),
                "score": total_score,
                "item_object": item.get("item_object"),
                "tiebreaker": item.get("tiebreaker", 0),
            })

    # 主要排序鍵：推薦分數；次要排序鍵：tiebreaker (皆由高到低)
    recommendations.sort(
        key=lambda x: (x["score"], x["tiebreaker"]),
        reverse=True
    )

    return recommendations
