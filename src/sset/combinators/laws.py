"""Set algebra laws and documentation."""

# The binary operations satisfy the following laws for any sets A, B:
#
# 1. Union bound: len(A | B) >= max(len(A), len(B))
#
# 2. Intersection containment: (A & B).is_subset(A) and (A & B).is_subset(B)
#
# 3. Symmetric difference: A ^ B == (A | B) - (A & B)
#
# 4. Equality: A.equals(B) iff (A ^ B).is_empty()
#
# 5. Add/remove inverse: A.add(x).remove(x) == A, for x not in A
#
# 6. Diff round trip: A.apply_changes(A.changes_to(B)) == B
#                     A.revert_changes(A.changes_to(B)) == A
#
# 7. Direction: A - B never depends on which of A, B is larger
